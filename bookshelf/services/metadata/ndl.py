"""Book metadata from the National Diet Library (NDL) search API.

Lookup by ISBN goes through the SRU searchRetrieve endpoint with the dcndl
record schema. The response looks like:

    searchRetrieveResponse
      numberOfRecords
      records/record/recordData
        rdf:RDF
          dcndl:BibAdminResource @rdf:about   (canonical record link)
          dcndl:BibResource                   (the bibliographic fields)

parse_ndl_response() turns that document into a flat BookData; it does no
I/O, so it can be exercised on canned XML.
"""

import re
from xml.etree import ElementTree

import httpx

from bookshelf.config import get_settings
from bookshelf.constants import NDL_MAXIMUM_RECORDS, NDL_RECORD_PACKING, NDL_RECORD_SCHEMA
from bookshelf.exceptions import NetworkError, NotFoundError
from bookshelf.models.schemas import BookData
from bookshelf.utils.http_client import get_general_client
from bookshelf.utils.logging import LogContext, get_logger

logger = get_logger(__name__)

NS = {
    "srw": "http://www.loc.gov/zing/srw/",
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcterms": "http://purl.org/dc/terms/",
    "dcndl": "http://ndl.go.jp/dcndl/terms/",
    "foaf": "http://xmlns.com/foaf/0.1/",
}

RDF_ABOUT = f"{{{NS['rdf']}}}about"
RDF_RESOURCE = f"{{{NS['rdf']}}}resource"

# e.g. http://id.ndl.go.jp/class/ndc9/007.6
NDC_PATTERN = re.compile(r"ndc[89]/(\d+\.\d+)")


def clean_isbn(isbn: str) -> str:
    """Strip hyphens, spaces and anything else that cannot be in an ISBN."""
    return re.sub(r"[^0-9Xx]", "", isbn).upper()


def parse_price(raw: str | None) -> int:
    """Keep only the digits of a price string ("1,800円+税" -> 1800)."""
    digits = re.sub(r"\D", "", raw or "")
    return int(digits) if digits else 0


def extract_ndc(subjects: list[str]) -> str:
    """Return the numeric NDC code of the first NDC8/NDC9 subject URI."""
    for resource in subjects:
        if "ndc" not in resource:
            continue
        match = NDC_PATTERN.search(resource)
        if match:
            return match.group(1)
    return ""


def _text(element: ElementTree.Element | None, path: str) -> str:
    if element is None:
        return ""
    found = element.find(path, NS)
    if found is None or found.text is None:
        return ""
    return found.text.strip()


def _value_and_transcription(resource: ElementTree.Element, path: str) -> tuple[str, str]:
    """Read rdf:value / dcndl:transcription of a <path><rdf:Description> block."""
    description = resource.find(f"{path}/rdf:Description", NS)
    return _text(description, "rdf:value"), _text(description, "dcndl:transcription")


def _agent_names(resource: ElementTree.Element, path: str) -> list[str]:
    names = []
    for agent in resource.findall(f"{path}/foaf:Agent", NS):
        name = _text(agent, "foaf:name")
        if name:
            names.append(name)
    return names


def _creators(resource: ElementTree.Element) -> str:
    names = _agent_names(resource, "dcterms:creator")
    if not names:
        names = [
            el.text.strip()
            for el in resource.findall("dc:creator", NS)
            if el.text and el.text.strip()
        ]
    return ", ".join(names)


def _record_rdf(record: ElementTree.Element) -> ElementTree.Element | None:
    """Get the rdf:RDF element of a record, whether packed as XML or as text."""
    record_data = record.find("srw:recordData", NS)
    if record_data is None:
        return None
    children = list(record_data)
    if children:
        return children[0]
    if record_data.text and record_data.text.strip():
        return ElementTree.fromstring(record_data.text.strip())
    return None


def parse_ndl_response(xml_text: str, isbn: str) -> BookData:
    """Map an SRU dcndl response to BookData.

    Raises:
        NotFoundError: if the response holds no bibliographic record
        NetworkError: if the body is not well-formed XML
    """
    try:
        root = ElementTree.fromstring(xml_text)
        records = root.findall("srw:records/srw:record", NS)
        rdf = _record_rdf(records[0]) if records else None
    except ElementTree.ParseError as e:
        raise NetworkError(f"Unreadable NDL response for ISBN {isbn}: {e}") from e

    if rdf is None:
        raise NotFoundError(f"No book found for ISBN {isbn}")

    resource = rdf.find("dcndl:BibResource", NS)
    if resource is None:
        raise NotFoundError(f"No book found for ISBN {isbn}")

    admin = rdf.find("dcndl:BibAdminResource", NS)
    url = ""
    if admin is not None:
        url = admin.get(RDF_ABOUT, "")
    if not url:
        url = resource.get(RDF_ABOUT, "")

    title_value, title_ruby = _value_and_transcription(resource, "dc:title")
    alt_title, alt_title_ruby = _value_and_transcription(resource, "dcndl:alternative")
    series, series_ruby = _value_and_transcription(resource, "dcndl:seriesTitle")
    publishers = _agent_names(resource, "dcterms:publisher")
    subjects = [
        el.get(RDF_RESOURCE, "")
        for el in resource.findall("dcterms:subject", NS)
        if el.get(RDF_RESOURCE)
    ]

    return BookData(
        isbn=isbn,
        title=_text(resource, "dcterms:title") or title_value,
        title_ruby=title_ruby,
        alt_title=alt_title,
        alt_title_ruby=alt_title_ruby,
        series=series,
        series_ruby=series_ruby,
        creators=_creators(resource),
        publisher=publishers[0] if publishers else "",
        date=_text(resource, "dcterms:date") or _text(resource, "dcterms:issued"),
        price=parse_price(_text(resource, "dcndl:price")),
        pages=_text(resource, "dcterms:extent"),
        ndc=extract_ndc(subjects),
        url=url,
    )


class NDLBookService:
    """Fetch book metadata by ISBN from the NDL search API.

    One GET per call; no retries and no caching.
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url or get_settings().ndl_api_url
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_general_client()

    async def fetch_book_data(self, isbn: str) -> BookData:
        """Look up one ISBN and return its BookData.

        Raises:
            NotFoundError: if NDL has no record for the ISBN
            NetworkError: if the request fails or the response is unusable
        """
        log = LogContext(logger, isbn=isbn)
        query_isbn = clean_isbn(isbn)
        if not query_isbn:
            log.warning("ISBN has no usable characters")
            raise NotFoundError(f"No book found for ISBN {isbn!r}")
        if query_isbn != isbn:
            log = log.bind(query=query_isbn)

        params = {
            "operation": "searchRetrieve",
            "version": "1.2",
            "recordSchema": NDL_RECORD_SCHEMA,
            "recordPacking": NDL_RECORD_PACKING,
            "maximumRecords": NDL_MAXIMUM_RECORDS,
            "query": f'isbn="{query_isbn}"',
        }
        try:
            response = await self.client.get(self.base_url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            log.error(f"NDL lookup failed: {e}")
            raise NetworkError(f"Lookup failed for ISBN {isbn}: {e}") from e

        book = parse_ndl_response(response.text, isbn)
        log.info(f"NDL lookup found: {book.title}")
        return book


# Singleton instance
ndl_service = NDLBookService()
