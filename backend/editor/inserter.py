"""
Section Inserter - adds new AirplaneSection / HotelsSection / TransportSection
blocks to a generated template, right after the opening <BaseTemplate ...>
tag, and makes sure the component is imported.
"""

import re
import time
import random
import string
import logging
from typing import Optional, Sequence

from config import AppConfig, get_section_defaults
from backend.editor.base import EditResult, EditStatus
from backend.editor.records import FlightRecord, HotelRecord, TransportTable, TravelRecord
from backend.editor.serializer import ELEMENT_INDENT, escape_string, serialize_record

logger = logging.getLogger(__name__)

BLOCK_INDENT = "      "
BASE_TEMPLATE_PATTERN = re.compile(r'<BaseTemplate[^>]*>')
USE_CLIENT_PATTERN = re.compile(r'^["\']use client["\'];?\s*\n')
IMPORT_LINE_PATTERN = re.compile(r'^import\s+.*?from\s+[\'"].*?[\'"];?[ \t]*$', re.MULTILINE)

# component -> (template module, id prefix)
SECTION_TEMPLATES = {
    "AirplaneSection": ("airplaneSection", "airplane"),
    "HotelsSection": ("HotelsSection", "hotels"),
    "TransportSection": ("TransportSection", "user_transport"),
}

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_section_id(prefix: str) -> str:
    """<prefix>_<epoch ms>_<9 base36 chars>"""
    suffix = ''.join(random.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def import_path_for(component: str) -> str:
    module, _ = SECTION_TEMPLATES[component]
    return f"{AppConfig.TEMPLATES_IMPORT_BASE}/{module}"


def build_section_block(
    component: str,
    field_name: str,
    records: Sequence[TravelRecord],
    section_id: Optional[str] = None,
    title: Optional[str] = None,
    show_title: Optional[bool] = None,
    notice_message: Optional[str] = None,
    show_notice: Optional[bool] = None,
    direction: Optional[str] = None,
    language: Optional[str] = None,
) -> str:
    """Render a complete self-closing section block (not yet indented)."""
    defaults = get_section_defaults()
    _, id_prefix = SECTION_TEMPLATES[component]
    elements = ",\n".join(ELEMENT_INDENT + serialize_record(r) for r in records)

    props = [f'id="{section_id or generate_section_id(id_prefix)}"']
    if title:
        props.append(f'title="{escape_string(title)}"')
    if show_title is not None:
        props.append(f"showTitle={{{'true' if show_title else 'false'}}}")
    if notice_message:
        props.append(f'noticeMessage="{escape_string(notice_message)}"')
    if show_notice is not None:
        props.append(f"showNotice={{{'true' if show_notice else 'false'}}}")
    props.append(f'direction="{direction or defaults["direction"]}"')
    props.append(f'language="{language or defaults["language"]}"')

    prop_lines = "\n  ".join(props)
    return f"<{component}\n  {field_name}={{[\n{elements}\n  ]}}\n  {prop_lines}\n/>"


def build_airplane_section(flights: Sequence[FlightRecord], **options) -> str:
    return build_section_block("AirplaneSection", "flights", flights, **options)


def build_hotels_section(hotels: Sequence[HotelRecord], **options) -> str:
    # Hotels sections carry no notice banner
    options.pop("notice_message", None)
    options.pop("show_notice", None)
    return build_section_block("HotelsSection", "hotels", hotels, **options)


def has_import(code: str, component: str) -> bool:
    pattern = re.compile(
        r'import\s+' + re.escape(component) + r'\s+from\s+[\'"][^\'"]*[\'"]'
    )
    return bool(pattern.search(code))


def ensure_import(code: str, component: str, import_path: str) -> str:
    """Add `import Component from 'path';` after the last import if missing."""
    if has_import(code, component):
        return code

    new_import = f"import {component} from '{import_path}';\n"
    last_import = None
    for last_import in IMPORT_LINE_PATTERN.finditer(code):
        pass

    if last_import is not None:
        insert_at = last_import.end()
        if code[insert_at:insert_at + 1] == "\n":
            insert_at += 1
        else:
            new_import = "\n" + new_import
        return code[:insert_at] + new_import + code[insert_at:]

    use_client = USE_CLIENT_PATTERN.match(code)
    if use_client:
        return code[:use_client.end()] + new_import + code[use_client.end():]

    return new_import + code


def edit_insert_section(code: str, component: str, block: str) -> EditResult:
    """
    Import the component and place the block at the top of BaseTemplate's
    content. Without a BaseTemplate only the import is added.
    """
    updated = ensure_import(code, component, import_path_for(component))

    base_match = BASE_TEMPLATE_PATTERN.search(updated)
    if not base_match:
        logger.warning(f"[INSERTER] BaseTemplate not found, {component} not inserted")
        return EditResult(updated, EditStatus.BLOCK_NOT_FOUND, "BaseTemplate not found")

    indented = "\n".join(BLOCK_INDENT + line for line in block.split("\n"))
    before = updated[:base_match.end()]
    after = updated[base_match.end():]
    # Reuse the newline after the opening tag when there is one
    separator = "" if after.startswith("\n") else "\n"

    logger.info(f"[INSERTER] Inserted {component} after BaseTemplate")
    return EditResult(before + "\n" + indented + separator + after, EditStatus.APPLIED,
                      f"Inserted {component}")


def insert_section(code: str, component: str, block: str) -> str:
    return edit_insert_section(code, component, block).code


def insert_airplane_section(code: str, flights: Sequence[FlightRecord], **options) -> str:
    return insert_section(code, "AirplaneSection", build_airplane_section(flights, **options))


def insert_hotels_section(code: str, hotels: Sequence[HotelRecord], **options) -> str:
    return insert_section(code, "HotelsSection", build_hotels_section(hotels, **options))


def build_transport_section(tables: Sequence[TransportTable], **options) -> str:
    options.pop("notice_message", None)
    options.pop("show_notice", None)
    return build_section_block("TransportSection", "tables", tables, **options)


def insert_transport_section(code: str, tables: Sequence[TransportTable], **options) -> str:
    return insert_section(code, "TransportSection", build_transport_section(tables, **options))
