"""
jsau-apiserver — Favorite Request/Response Schemas
===================================================

What:  Pydantic models for favorite records and the /favorites request bodies.
Why:   Records read from favorites.json are validated on load, so a file with
       wrongly-shaped entries fails with a typed error instead of misbehaving
       later in the request.
How:   `FavoriteList` validates a whole array at once; request bodies use
       optional fields so that "missing" is reported by the service with the
       API's own message rather than by the framework.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter


class Favorite(BaseModel):
    """
    What:  One entry of favorites.json.
    Who:   Returned (as a list) by GET /favorites; created by POST /favorites.

    Extra fields written by older clients are preserved on rewrite.
    """
    id: int = Field(description="Identifier assigned at insert time")
    recetteFile: str = Field(description="File name of the favorited HTML document")

    model_config = {"extra": "allow"}


# Validates the top-level array of favorites.json in one call
FavoriteList = TypeAdapter(List[Favorite])


class AddFavoriteRequest(BaseModel):
    """Body of POST /favorites."""
    recetteFile: Optional[str] = Field(
        default=None,
        description="File name of an existing document in the HTML directory",
        examples=["soupe_a_l_oignon.html"],
    )


class RemoveFavoriteRequest(BaseModel):
    """Body of DELETE /favorites."""
    filename: Optional[str] = Field(
        default=None,
        description="recetteFile value of the favorite to remove",
        examples=["soupe_a_l_oignon.html"],
    )
