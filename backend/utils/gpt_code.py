"""
Generated Code Helpers - inspection and cleanup of LLM-generated JSX
=====================================================================

The template generator returns a React component as text. Before it reaches
the preview renderer it is cleaned here:

- markdown fences stripped
- template import paths normalized to the frontend layout
- "use client" / React import / export default ensured

Plus a few read-only inspections (component name, imports, used components,
structural validation) used by the code endpoints.

Author: Section Editor Team
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from config import AppConfig

logger = logging.getLogger(__name__)


# =============================================================================
# PATTERNS
# =============================================================================

COMPONENT_NAME_PATTERNS = [
    re.compile(r'export\s+default\s+function\s+(\w+)'),
    re.compile(r'const\s+(\w+)\s*=\s*\(\)\s*=>'),
    re.compile(r'function\s+(\w+)\s*\('),
    re.compile(r'export\s+default\s+(\w+)'),
]

IMPORT_PATTERN = re.compile(r'^import\s+.*?from\s+[\'"].*?[\'"];?', re.MULTILINE)
IMPORT_LINE_PATTERN = re.compile(r'^import\s+.*?from\s+[\'"].*?[\'"];?\n?', re.MULTILINE)
REACT_IMPORT_PATTERN = re.compile(r'^import\s+.*?\bReact\b.*?from\s+[\'"]react[\'"];?', re.MULTILINE)
JSX_RETURN_PATTERN = re.compile(r'return\s*\(([\s\S]*?)\)\s*;?\s*}')
USED_COMPONENT_PATTERN = re.compile(r'<([A-Z][a-zA-Z0-9]*)\b')
PROPS_PATTERN = re.compile(r'(?:function\s+\w+\s*\(|const\s+\w+\s*=\s*\(|\(\)\s*=>)\s*\{?\s*([^)]*)\}?')
USE_CLIENT_PATTERN = re.compile(r'("use client"|\'use client\');?\n?')
CODE_FENCE_OPEN = re.compile(r'^```(?:jsx|javascript|tsx|typescript)?\n', re.MULTILINE)
CODE_FENCE_CLOSE = re.compile(r'```$', re.MULTILINE)

HTML_TAGS = {
    'div', 'span', 'p', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'ul', 'ol', 'li', 'table', 'thead', 'tbody', 'tr', 'td', 'th',
}

# Generator file names -> frontend module names
TEMPLATE_MODULES = {
    'base_template': 'baseTemplate',
    'section_template': 'sectionTemplate',
    'dynamic_table_template': 'dynamicTableTemplate',
}
_TEMPLATE_NAMES = '|'.join(list(TEMPLATE_MODULES) + list(TEMPLATE_MODULES.values()))
TEMPLATE_IMPORT_PATTERN = re.compile(
    r'from\s+[\'"](?:\./|\.\./|@/)templates/(' + _TEMPLATE_NAMES + r')[\'"]'
)

GENERATED_TEMPLATE_MARKER = 'export default function Template('


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass
class JSXValidation:
    """Structural check of a generated component."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self):
        return {"is_valid": self.is_valid, "errors": self.errors, "warnings": self.warnings}


# =============================================================================
# INSPECTION
# =============================================================================

def extract_component_name(code: str) -> Optional[str]:
    for pattern in COMPONENT_NAME_PATTERNS:
        match = pattern.search(code)
        if match and match.group(1):
            return match.group(1)
    return None


def extract_imports(code: str) -> List[str]:
    return IMPORT_PATTERN.findall(code)


def extract_react_import(code: str) -> Optional[str]:
    match = REACT_IMPORT_PATTERN.search(code)
    return match.group(0) if match else None


def has_react_import(code: str) -> bool:
    return extract_react_import(code) is not None


def extract_component_code(code: str) -> str:
    """Component body without imports and without `export default`."""
    component_code = IMPORT_LINE_PATTERN.sub('', code)
    component_code = re.sub(r'export\s+default\s+', '', component_code)
    return component_code.strip()


def extract_jsx_return(code: str) -> Optional[str]:
    match = JSX_RETURN_PATTERN.search(code)
    return match.group(1).strip() if match else None


def extract_used_components(code: str) -> List[str]:
    """Capitalized JSX tags in first-use order, HTML tags excluded."""
    components: List[str] = []
    for match in USED_COMPONENT_PATTERN.finditer(code):
        name = match.group(1)
        if name.lower() not in HTML_TAGS and name not in components:
            components.append(name)
    return components


def extract_props(code: str) -> List[str]:
    match = PROPS_PATTERN.search(code)
    if not match or not match.group(1):
        return []
    props = []
    for part in match.group(1).split(','):
        # `{ title = "x", items: list }` -> title, items
        name = part.strip().strip('{}').split(':')[0].split('=')[0].strip()
        if name and name != 'props':
            props.append(name)
    return props


def validate_jsx_structure(code: str) -> JSXValidation:
    errors: List[str] = []
    warnings: List[str] = []

    if not has_react_import(code):
        warnings.append("React import may be missing")
    if not extract_component_name(code):
        errors.append("No component definition found")
    if not extract_jsx_return(code):
        errors.append("No JSX return statement found")
    if 'export default' not in code:
        warnings.append("Component may not be exported")

    return JSXValidation(is_valid=not errors, errors=errors, warnings=warnings)


def parse_gpt_response(response: Any) -> Optional[str]:
    """Pull the code out of the shapes the generation API has returned."""
    if isinstance(response, str):
        return response
    if not isinstance(response, dict):
        return None
    for key in ('jsxCode', 'code'):
        if response.get(key):
            return response[key]
    content = response.get('content')
    if isinstance(content, str):
        return content
    return None


# =============================================================================
# CLEANUP
# =============================================================================

def format_code(code: str) -> str:
    """Blank line before `export default`."""
    return re.sub(r'\n(export\s+default)', r'\n\n\1', code)


def fix_import_paths(code: str) -> str:
    """
    Point template imports at the frontend Templates directory and add the
    "use client" directive to hand-written components.
    """
    base = AppConfig.TEMPLATES_IMPORT_BASE

    def _rewrite(match: re.Match) -> str:
        module = TEMPLATE_MODULES.get(match.group(1), match.group(1))
        return f"from '{base}/{module}'"

    fixed = TEMPLATE_IMPORT_PATTERN.sub(_rewrite, code)

    # Generated templates are rendered without the directive
    is_generated_template = GENERATED_TEMPLATE_MARKER in fixed
    has_directive = '"use client"' in fixed or "'use client'" in fixed
    if not is_generated_template and not has_directive and 'import' in fixed:
        fixed = '"use client";\n\n' + fixed

    return fixed


def clean_jsx_code(code: str) -> str:
    """Full cleanup pass applied to every generated component."""
    cleaned = code.strip()
    cleaned = CODE_FENCE_OPEN.sub('', cleaned)
    cleaned = CODE_FENCE_CLOSE.sub('', cleaned)

    cleaned = fix_import_paths(cleaned)

    if not has_react_import(cleaned):
        if cleaned.startswith('"use client"') or cleaned.startswith("'use client'"):
            cleaned = USE_CLIENT_PATTERN.sub(r"\1;\n\nimport React from 'react';\n", cleaned, count=1)
        else:
            cleaned = "import React from 'react';\n\n" + cleaned

    if 'export default' not in cleaned:
        name = extract_component_name(cleaned)
        if name:
            cleaned = re.sub(r'(function|const)\s+' + re.escape(name) + r'\b',
                             r'export default \1 ' + name, cleaned, count=1)
        else:
            logger.warning("[GPT CODE] No component found to export")

    return cleaned
