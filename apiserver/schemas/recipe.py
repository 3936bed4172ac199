"""
jsau-apiserver — Recipe Schemas
================================

What:  Pydantic model for a recipe record read from the catalog file.
Why:   The document lookup needs `id` and `recette` with known types; a record
       missing them is a data error, reported instead of crashing mid-request.

The catalog list endpoint returns records verbatim, so this model is only
applied to the record matched by GET /recette/{id}. Unknown fields are kept.
"""

from pydantic import BaseModel, Field


class Recipe(BaseModel):
    """
    What:  One entry of recettes.json.
    Who:   Built by RecipeService.find_recipe() from the raw catalog entry.
    """
    id: int = Field(description="Unique recipe identifier")
    recette: str = Field(description="Display name, also used to derive the document filename")

    model_config = {"extra": "allow"}
