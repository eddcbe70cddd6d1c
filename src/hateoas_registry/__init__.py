"""
hateoas_registry - client-side data access for HAL/HATEOAS REST APIs.

Maps wire resource types to domain classes, records which properties are
links and relationships, and resolves them lazily through data services.
"""
