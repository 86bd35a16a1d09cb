# ABOUTME: Fixed names used by the EPUB archive layout.
# ABOUTME: Namespaces, media types, and the paths quire reads and writes.

OPF_NAMESPACE = "http://www.idpf.org/2007/opf"
DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
CONTAINER_NAMESPACE = "urn:oasis:names:tc:opendocument:xmlns:container"

OPF_VERSION = "2.0"
CONTAINER_VERSION = "1.0"

EPUB_MEDIA_TYPE = "application/epub+zip"
OPF_MEDIA_TYPE = "application/oebps-package+xml"
XHTML_MEDIA_TYPE = "application/xhtml+xml"

MIMETYPE_NAME = "mimetype"
CONTAINER_PATH = "META-INF/container.xml"
CONTENT_DIR = "OEBPS"
OPF_PATH = f"{CONTENT_DIR}/content.opf"

# Matches the id attribute on dc:identifier written by quire.
UNIQUE_IDENTIFIER_ID = "BookId"

DEFAULT_TITLE = "Unknown Title"
DEFAULT_AUTHOR = "Unknown Author"
UNTITLED_CHAPTER = "Untitled"

CHAPTER_SUFFIX = ".xhtml"
FALLBACK_CHAPTER_STEM = "chapter"

STAGING_PREFIX = "quire-"
