"""Book records used by the searchable scenarios.

Indexes referenced by the scenario tests:
- 0 and 3 share the author "Jane Roe"; 3 is also by "Mark Henderson"
- 8's title partially overlaps with 0 (three terms) and 5 (two terms)
"""

BOOKS = [
    {
        "title": "Practical Python Search",
        "authors": ["John Doe", "Jane Roe"],
        "categories": ["programming"],
    },
    {
        "title": "Gardening for Beginners",
        "authors": ["Alice Green"],
        "categories": ["home"],
    },
    {
        "title": "The Art of Baking",
        "authors": ["Paul Baker"],
        "categories": ["cooking"],
    },
    {
        "title": "Distributed Systems Notes",
        "authors": ["Jane Roe", "Mark Henderson"],
        "categories": ["computing"],
    },
    {
        "title": "Ocean Tides Explained",
        "authors": ["Sam Waters"],
        "categories": ["science"],
    },
    {
        "title": "Search Engines in Practice",
        "authors": ["Lee Chan"],
        "categories": ["information retrieval"],
    },
    {
        "title": "Mountain Trails",
        "authors": ["Ann Hill"],
        "categories": ["travel"],
    },
    {
        "title": "Jazz History",
        "authors": ["Miles Cole"],
        "categories": ["music"],
    },
    {
        "title": "Practical Search Engines with Python",
        "authors": ["Rita Moss"],
        "categories": ["programming"],
    },
]

BOOK_FIELDS = ("title", "authors", "categories")
