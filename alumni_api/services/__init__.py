"""
Services module - business rules for each entity, on top of MongoDB.
"""
