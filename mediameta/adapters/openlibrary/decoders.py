"""
Decodeurs des reponses Open Library.

Les endpoints Open Library renvoient parfois un meme champ logique sous
plusieurs formes (auteur nu ou imbrique, description texte ou objet type,
dates en formats varies). Chaque decodeur essaie les formes connues dans
un ordre fixe et converge vers une representation interne unique ; les
formes brutes ne sortent jamais de ce module.

Regles :
- un champ optionnel absent ou illisible devient None / vide, jamais une
  valeur factice (pas de 0 pour un nombre de pages absent) ;
- un champ obligatoire absent (titre, cle...) leve DecodeError.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from mediameta.core.exceptions import DecodeError

DEFAULT_ROLE = "Author"

SOURCE_NAME = "Openlibrary"

# Ordre de priorite des formats de date rencontres dans les editions
DATE_FORMATS = (
    "%b %d, %Y",  # Jan 1, 1950
    "%B %d, %Y",  # January 1, 1950
    "%Y-%m-%d",  # 1950-01-01
    "%B %Y",  # January 1950
    "%b %Y",  # Jan 1950
    "%Y",  # 1950
)


@dataclass(frozen=True)
class AuthorRef:
    """Reference d'auteur decodee : cle Open Library et role."""

    key: str
    role: str = DEFAULT_ROLE


@dataclass(frozen=True)
class WorkRecord:
    key: str
    title: str
    description: Optional[str] = None
    covers: tuple[int, ...] = ()
    authors: tuple[AuthorRef, ...] = ()
    subjects: tuple[str, ...] = ()


@dataclass(frozen=True)
class EditionRecord:
    publish_date: Optional[str] = None
    number_of_pages: Optional[int] = None
    covers: tuple[int, ...] = ()


@dataclass(frozen=True)
class AuthorRecord:
    name: str
    photos: tuple[int, ...] = ()


@dataclass(frozen=True)
class SearchDoc:
    key: str
    title: str
    author_names: tuple[str, ...] = ()
    cover_id: Optional[int] = None
    first_publish_year: Optional[int] = None
    number_of_pages_median: Optional[int] = None


@dataclass(frozen=True)
class SearchPage:
    total: int
    docs: tuple[SearchDoc, ...] = ()


def _require_str(payload: dict[str, Any], field: str, reference: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value:
        raise DecodeError(
            f"Champ obligatoire '{field}' absent ou invalide",
            source=SOURCE_NAME,
            reference=reference,
        )
    return value


def _require_dict(payload: Any, reference: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError(
            f"Objet JSON attendu, recu {type(payload).__name__}",
            source=SOURCE_NAME,
            reference=reference,
        )
    return payload


def _optional_int(value: Any) -> Optional[int]:
    # bool est un int en Python, a exclure
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _int_list(value: Any) -> tuple[int, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(i for i in (_optional_int(v) for v in value) if i is not None)


def _str_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, str))


def decode_author_ref(raw: Any) -> Optional[AuthorRef]:
    """
    Decode une reference d'auteur polymorphe.

    Formes connues, dans l'ordre :
    - cle nue : "/authors/OL23919A"
    - objet plat : {"key": "/authors/OL23919A"}
    - objet imbrique : {"author": {"key": "/authors/OL23919A"},
                        "type": {"key": "/type/author_role"}, "role": "Editor"}

    Args:
        raw: Valeur brute d'un element de "authors"

    Returns:
        AuthorRef (role "Author" par defaut), ou None si aucune forme ne correspond
    """
    if isinstance(raw, str) and raw:
        return AuthorRef(key=raw)
    if not isinstance(raw, dict):
        return None

    key = raw.get("key")
    if isinstance(key, str) and key:
        return AuthorRef(key=key)

    author = raw.get("author")
    if isinstance(author, str) and author:
        key = author
    elif isinstance(author, dict) and isinstance(author.get("key"), str):
        key = author["key"]
    else:
        return None

    role = raw.get("role")
    if not isinstance(role, str) or not role.strip():
        role = DEFAULT_ROLE
    return AuthorRef(key=key, role=role.strip())


def decode_description(raw: Any) -> Optional[str]:
    """
    Decode une description polymorphe vers du texte brut.

    Formes connues : chaine simple, ou {"type": "/type/text", "value": "..."}
    (l'etiquette de type est ignoree).
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("value"), str):
        return raw["value"]
    return None


def parse_date(raw: Any) -> Optional[date]:
    """
    Parse une date selon DATE_FORMATS, premier format qui reussit.

    Une date illisible est consideree absente, jamais comme une erreur.
    """
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def decode_work(payload: Any, reference: str = "") -> WorkRecord:
    """
    Decode la reponse de works/{id}.json.

    Raises:
        DecodeError: Si key ou title est absent
    """
    data = _require_dict(payload, reference)
    authors = data.get("authors")
    refs = (
        tuple(ref for ref in (decode_author_ref(a) for a in authors) if ref is not None)
        if isinstance(authors, list)
        else ()
    )
    return WorkRecord(
        key=_require_str(data, "key", reference),
        title=_require_str(data, "title", reference),
        description=decode_description(data.get("description")),
        covers=_int_list(data.get("covers")),
        authors=refs,
        subjects=_str_list(data.get("subjects")),
    )


def decode_editions(payload: Any, reference: str = "") -> tuple[EditionRecord, ...]:
    """Decode la reponse de works/{id}/editions.json (entries optionnel)."""
    data = _require_dict(payload, reference)
    entries = data.get("entries")
    if not isinstance(entries, list):
        return ()
    editions = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        publish_date = entry.get("publish_date")
        editions.append(
            EditionRecord(
                publish_date=publish_date if isinstance(publish_date, str) else None,
                number_of_pages=_optional_int(entry.get("number_of_pages")),
                covers=_int_list(entry.get("covers")),
            )
        )
    return tuple(editions)


def decode_author(payload: Any, reference: str = "") -> AuthorRecord:
    """
    Decode la reponse de authors/{id}.json.

    Raises:
        DecodeError: Si name est absent
    """
    data = _require_dict(payload, reference)
    return AuthorRecord(
        name=_require_str(data, "name", reference),
        photos=_int_list(data.get("photos")),
    )


def decode_search(payload: Any, reference: str = "") -> SearchPage:
    """
    Decode la reponse de search.json.

    Raises:
        DecodeError: Si num_found ou docs est absent, ou si un doc n'a ni key ni title
    """
    data = _require_dict(payload, reference)
    # numFound : ancienne orthographe, encore renvoyee par certains miroirs
    total = _optional_int(data.get("num_found", data.get("numFound")))
    docs = data.get("docs")
    if total is None or not isinstance(docs, list):
        raise DecodeError(
            "Reponse de recherche sans num_found/docs",
            source=SOURCE_NAME,
            reference=reference,
        )
    decoded = []
    for doc in docs:
        doc = _require_dict(doc, reference)
        decoded.append(
            SearchDoc(
                key=_require_str(doc, "key", reference),
                title=_require_str(doc, "title", reference),
                author_names=_str_list(doc.get("author_name")),
                cover_id=_optional_int(doc.get("cover_i")),
                first_publish_year=_optional_int(doc.get("first_publish_year")),
                number_of_pages_median=_optional_int(doc.get("number_of_pages_median")),
            )
        )
    return SearchPage(total=total, docs=tuple(decoded))


def decode_isbn_works(payload: Any) -> tuple[str, ...]:
    """Decode les cles d'oeuvres de isbn/{isbn}.json (vide si aucune)."""
    if not isinstance(payload, dict):
        return ()
    works = payload.get("works")
    if not isinstance(works, list):
        return ()
    keys = []
    for work in works:
        if isinstance(work, dict) and isinstance(work.get("key"), str):
            keys.append(work["key"])
    return tuple(keys)


def decode_partial_html(payload: Any) -> Optional[str]:
    """
    Extrait le fragment HTML de l'enveloppe de partials.json.

    L'enveloppe connue est {"0": "<html...>"} ; toute autre forme donne None.
    """
    if isinstance(payload, dict) and isinstance(payload.get("0"), str):
        return payload["0"]
    return None
