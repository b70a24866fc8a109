"""
Card catalog search (Scryfall).

Search: https://scryfall.com/docs/api/cards/search
"""

import logging
import time
import uuid
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import httpx
from django.conf import settings
from django.core.cache import cache

from .exceptions import CatalogUnavailableError

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
USER_AGENT = 'CardPool/0.1'
DEBOUNCE_CACHE_PREFIX = 'card-search-latest'


@dataclass(frozen=True)
class CatalogCard:
    """One printing of a card as returned by a search."""

    scryfall_id: str
    name: str
    set_name: str
    price: Optional[Decimal]
    image_small: str
    image_normal: str


def _image(card: Dict[str, Any], size: str) -> str:
    # Double-faced cards carry images per face instead of at the top level
    uris = card.get('image_uris') or {}
    if uris.get(size):
        return uris[size]
    faces = card.get('card_faces') or []
    if faces and isinstance(faces[0], dict):
        return (faces[0].get('image_uris') or {}).get(size, '')
    return ''


def _price(card: Dict[str, Any]) -> Optional[Decimal]:
    usd = (card.get('prices') or {}).get('usd')
    if usd in (None, ''):
        return None
    try:
        return Decimal(str(usd))
    except InvalidOperation:
        return None


def parse_card(card: Dict[str, Any]) -> CatalogCard:
    """
    Normalize a Scryfall card object.

    Raises:
        KeyError: If the card has no id or name
    """
    return CatalogCard(
        scryfall_id=str(card['id']),
        name=card['name'],
        set_name=card.get('set_name', ''),
        price=_price(card),
        image_small=_image(card, 'small'),
        image_normal=_image(card, 'normal'),
    )


def fetch_cards(query: str) -> List[Dict[str, Any]]:
    """
    Run one search request against the catalog.

    Args:
        query: Scryfall search query

    Returns:
        Raw card objects, every printing listed separately

    Raises:
        CatalogUnavailableError: On transport errors, non-2xx answers
            (Scryfall answers 404 when nothing matches) or a malformed body
    """
    url = f"{settings.CARD_CATALOG_URL.rstrip('/')}/cards/search"

    try:
        response = httpx.get(
            url,
            params={'q': query, 'unique': 'prints'},
            headers={'User-Agent': USER_AGENT, 'Accept': 'application/json'},
            timeout=settings.CARD_CATALOG_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        raise CatalogUnavailableError(f"Card search failed: {e}") from e
    except ValueError as e:
        raise CatalogUnavailableError("Card search returned invalid JSON") from e

    cards = data.get('data') if isinstance(data, dict) else None
    if not isinstance(cards, list):
        raise CatalogUnavailableError("Card search returned an unexpected body")
    return cards


def _is_latest_search(debounce_key: str) -> bool:
    """
    Register a search for ``debounce_key`` and wait out the quiet window.

    Returns False if another search for the same key started meanwhile.
    """
    delay = settings.CARD_SEARCH_DEBOUNCE_SECONDS
    if delay <= 0:
        return True

    cache_key = f'{DEBOUNCE_CACHE_PREFIX}:{debounce_key}'
    token = uuid.uuid4().hex
    cache.set(cache_key, token, timeout=max(60, int(delay * 10)))
    time.sleep(delay)
    return cache.get(cache_key) == token


def search_cards(query: str, *, debounce_key: Optional[str] = None) -> List[CatalogCard]:
    """
    Search the card catalog.

    Never raises for catalog problems: short queries, superseded searches
    and failed lookups all give an empty list.

    Args:
        query: Free text typed by the user
        debounce_key: Identifies the searcher (usually the user id); only
            the last search started within the debounce window runs

    Returns:
        Up to CARD_SEARCH_MAX_RESULTS cards
    """
    query = (query or '').strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    if debounce_key is not None and not _is_latest_search(debounce_key):
        logger.debug("Card search %r superseded for %s", query, debounce_key)
        return []

    try:
        raw_cards = fetch_cards(query)
    except CatalogUnavailableError as e:
        logger.warning("Card catalog unavailable for %r: %s", query, e)
        return []

    results = []
    for raw in raw_cards[:settings.CARD_SEARCH_MAX_RESULTS]:
        try:
            results.append(parse_card(raw))
        except (KeyError, TypeError, AttributeError):
            logger.warning("Skipping malformed catalog card: %r", raw)
    return results
