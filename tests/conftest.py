"""
Pytest configuration for OPC Interpreter
"""

import logging
import sys
import zipfile
from pathlib import Path
from typing import Dict, Union

import pytest

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
R_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
X_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"

DOCX_CONTENT_TYPES = '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
    <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
    <Default Extension="xml" ContentType="application/xml"/>
    <Default Extension="png" ContentType="image/png"/>
    <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
    <Override PartName="/word/styles.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"/>
    <Override PartName="/word/header1.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.header+xml"/>
    <Override PartName="/word/header2.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.header+xml"/>
    <Override PartName="/word/footer1.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.footer+xml"/>
    <Override PartName="/word/charts/chart1.xml" ContentType="application/vnd.openxmlformats-officedocument.drawingml.chart+xml"/>
    <Override PartName="/docProps/core.xml" ContentType="application/vnd.openxmlformats-package.core-properties+xml"/>
</Types>'''

DOCUMENT_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:document xmlns:w="{W_NS}" xmlns:r="{R_NS}">
    <w:body>
        <w:p>
            <w:pPr><w:jc w:val="center"/></w:pPr>
            <w:r><w:rPr><w:b/></w:rPr><w:t>Hello</w:t></w:r>
            <w:r><w:t xml:space="preserve"> world</w:t></w:r>
        </w:p>
        <w:p>
            <w:bookmarkStart w:id="0" w:name="_GoBack"/><w:bookmarkEnd w:id="0"/>
            <w:bookmarkStart w:id="1" w:name="intro"/>
            <w:r><w:t>Second &amp; last</w:t></w:r>
            <w:bookmarkEnd w:id="1"/>
        </w:p>
        <w:tbl>
            <w:tblGrid><w:gridCol w:w="2000"/><w:gridCol w:w="2000"/></w:tblGrid>
            <w:tr>
                <w:tc>
                    <w:tbl><w:tr><w:tc><w:p><w:r><w:t>Inner</w:t></w:r></w:p></w:tc></w:tr></w:tbl>
                    <w:p><w:r><w:t>A1</w:t></w:r></w:p>
                </w:tc>
                <w:tc>
                    <w:p><w:bookmarkStart w:id="2" w:name="intro"/><w:r><w:t>B1</w:t></w:r><w:bookmarkEnd w:id="2"/></w:p>
                </w:tc>
            </w:tr>
        </w:tbl>
        <w:p>
            <w:pPr><w:rPr><w:sz w:val="32"/></w:rPr></w:pPr>
            <w:r><w:rPr><w:i/><w:u w:val="single"/></w:rPr><w:t>Big</w:t></w:r>
        </w:p>
        <w:sectPr/>
    </w:body>
</w:document>'''

STYLES_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:styles xmlns:w="{W_NS}">
    <w:docDefaults>
        <w:rPrDefault><w:rPr><w:sz w:val="24"/><w:szCs w:val="24"/></w:rPr></w:rPrDefault>
    </w:docDefaults>
</w:styles>'''

STYLES_WITHOUT_DEFAULTS_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:styles xmlns:w="{W_NS}"><w:style w:type="paragraph" w:styleId="Normal"/></w:styles>'''

HEADER_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:hdr xmlns:w="{W_NS}"><w:p><w:r><w:t>Header text</w:t></w:r></w:p></w:hdr>'''

FOOTER_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<w:ftr xmlns:w="{W_NS}"><w:p><w:r><w:t>Footer text</w:t></w:r></w:p></w:ftr>'''

CHART_XML = '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<c:chartSpace xmlns:c="http://schemas.openxmlformats.org/drawingml/2006/chart" xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main"><c:chart/></c:chartSpace>'''

CORE_XML = '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<cp:coreProperties xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties" xmlns:dc="http://purl.org/dc/elements/1.1/"><dc:title>Test Document</dc:title></cp:coreProperties>'''

ROOT_RELS = '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
    <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>
</Relationships>'''

XLSX_CONTENT_TYPES = '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
    <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
    <Default Extension="xml" ContentType="application/xml"/>
    <Override PartName="/xl/workbook.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"/>
    <Override PartName="/xl/worksheets/sheet1.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"/>
    <Override PartName="/xl/worksheets/sheet2.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"/>
    <Override PartName="/xl/sharedStrings.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.sharedStrings+xml"/>
    <Override PartName="/xl/styles.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.styles+xml"/>
    <Override PartName="/xl/drawings/drawing1.xml" ContentType="application/vnd.openxmlformats-officedocument.drawing+xml"/>
    <Override PartName="/xl/charts/chart1.xml" ContentType="application/vnd.openxmlformats-officedocument.drawingml.chart+xml"/>
    <Override PartName="/xl/comments1.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.comments+xml"/>
</Types>'''

WORKBOOK_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<workbook xmlns="{X_NS}" xmlns:r="{R_NS}"><sheets><sheet name="Sheet1" sheetId="1" r:id="rId1"/><sheet name="Sheet2" sheetId="2" r:id="rId2"/></sheets></workbook>'''

SHEET1_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<worksheet xmlns="{X_NS}"><sheetData><row r="1"><c r="A1" t="s"><v>0</v></c></row></sheetData></worksheet>'''

SHEET2_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<worksheet xmlns="{X_NS}"><sheetData><row r="1"><c r="A1"><v>42</v></c></row></sheetData></worksheet>'''

SHARED_STRINGS_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<sst xmlns="{X_NS}" count="1" uniqueCount="1"><si><t>Hello</t></si></sst>'''

XLSX_STYLES_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<styleSheet xmlns="{X_NS}"><fonts count="1"><font><sz val="11"/></font></fonts></styleSheet>'''

DRAWING_XML = '''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<xdr:wsDr xmlns:xdr="http://schemas.openxmlformats.org/drawingml/2006/spreadsheetDrawing" xmlns:a="http://schemas.openxmlformats.org/drawingml/2006/main"/>'''

COMMENTS_XML = f'''<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<comments xmlns="{X_NS}"><authors><author>Reviewer</author></authors><commentList/></comments>'''


def write_package(path: Path, contents: Dict[str, Union[str, bytes]],
                  compression: int = zipfile.ZIP_DEFLATED) -> Path:
    """Write a zip archive with entries in dict order."""
    with zipfile.ZipFile(path, 'w', compression) as zf:
        for filename, content in contents.items():
            zf.writestr(filename, content)
    return path


def read_entries(path) -> Dict[str, bytes]:
    """Read every entry of a zip archive."""
    with zipfile.ZipFile(path, 'r') as zf:
        return {name: zf.read(name) for name in zf.namelist()}


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for tests."""
    return tmp_path


@pytest.fixture
def sample_zip_content():
    """Entries of a small .docx package (header2.xml is declared but absent)."""
    return {
        '[Content_Types].xml': DOCX_CONTENT_TYPES,
        '_rels/.rels': ROOT_RELS,
        'docProps/core.xml': CORE_XML,
        'word/document.xml': DOCUMENT_XML,
        'word/styles.xml': STYLES_XML,
        'word/header1.xml': HEADER_XML,
        'word/footer1.xml': FOOTER_XML,
        'word/charts/chart1.xml': CHART_XML,
        'word/media/image1.png': b'\x89PNG\r\n\x1a\nfake image data',
    }


@pytest.fixture
def sample_xlsx_content():
    """Entries of a small .xlsx package."""
    return {
        '[Content_Types].xml': XLSX_CONTENT_TYPES,
        'xl/workbook.xml': WORKBOOK_XML,
        'xl/worksheets/sheet1.xml': SHEET1_XML,
        'xl/worksheets/sheet2.xml': SHEET2_XML,
        'xl/sharedStrings.xml': SHARED_STRINGS_XML,
        'xl/styles.xml': XLSX_STYLES_XML,
        'xl/drawings/drawing1.xml': DRAWING_XML,
        'xl/charts/chart1.xml': CHART_XML,
        'xl/comments1.xml': COMMENTS_XML,
    }


@pytest.fixture
def docx_path(temp_dir, sample_zip_content):
    """Path to the sample .docx package."""
    return write_package(temp_dir / "test.docx", sample_zip_content)


@pytest.fixture
def xlsx_path(temp_dir, sample_xlsx_content):
    """Path to the sample .xlsx package."""
    return write_package(temp_dir / "test.xlsx", sample_xlsx_content)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    logging.raiseExceptions = False


@pytest.fixture
def make_package(temp_dir):
    """Factory writing a zip archive from a name -> content mapping."""
    def _make(contents, name="package.zip", compression=zipfile.ZIP_DEFLATED):
        return write_package(temp_dir / name, contents, compression)
    return _make


@pytest.fixture
def zip_entries():
    """Reader returning every entry of an archive as bytes."""
    return read_entries
