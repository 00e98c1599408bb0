"""Domain layer: document categories, storage keys, submission workflow"""
