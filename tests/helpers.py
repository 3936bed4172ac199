"""Small file helpers shared by the test modules."""

import json


def write_json(path, data) -> None:
    """Write `data` as JSON, or raw text when given a str."""
    text = data if isinstance(data, str) else json.dumps(data, indent=2)
    path.write_text(text, encoding="utf-8")


def read_json(path):
    return json.loads(path.read_text(encoding="utf-8"))


SAMPLE_RECIPES = [
    {"id": 1, "recette": "Soupe", "duree": "30 min"},
    {"id": 2, "recette": "Tarte   Tatin", "duree": "1 h"},
]
