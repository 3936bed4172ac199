# Routes package init
"""
jsau-apiserver — API Routes Package
====================================

Route Inventory:
    - info.py:       GET    /info              (plain-text version string)
    - recipes.py:    GET    /search            (catalog, or ?recette= document)
                     GET    /recette/{id}      (document download by recipe ID)
    - favorites.py:  POST   /favorites         (add)
                     GET    /favorites         (list)
                     DELETE /favorites         (remove)
    - health.py:     GET    /health            (data layout check)

Routes are thin: extract parameters, call a service, shape the response.
"""
