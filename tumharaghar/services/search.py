"""
Local text search over already fetched listings.
"""

from typing import List, Optional

from tumharaghar.schemas.property import PropertyRecord


def filter_properties(properties: List[PropertyRecord], search_term: Optional[str]) -> List[PropertyRecord]:
    """
    Keep listings whose title or location contains the search term.

    Matching is case-insensitive. An empty term keeps every listing
    in its original order.
    """
    term = (search_term or "").lower()
    if not term:
        return list(properties)

    return [
        record for record in properties
        if term in record.title.lower() or term in record.location.lower()
    ]
