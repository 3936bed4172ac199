# Services package init
"""
jsau-apiserver — Services Layer
================================

What:  Business logic between routes (HTTP) and the data files (persistence).
Why:   Routes handle HTTP; services handle catalog and favorites rules and
       translate storage failures into API errors.

Service Inventory:
    - RecordStore (abstract): load/save interface for a record collection
    - JsonFileStore: RecordStore backed by one JSON array file
    - DocumentDirectory: path resolution inside the HTML document directory
    - RecipeService: catalog listing and document lookup
    - FavoritesService: favorites add/list/remove under a write lock
"""
