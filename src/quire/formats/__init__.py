# ABOUTME: EPUB archive codec: container.xml, content.opf, staging, and zip handling.
# ABOUTME: Entry points are quire.formats.epub.read_epub and write_epub.
