"""
Generated Code Helper Tests
===========================
Cleanup and inspection of generator output.
"""

import pytest

from backend.utils import gpt_code

CARD = """function Card({ title, items }) {
  return (
    <div>
      <BaseTemplate>
        <AirplaneSection />
        <span>{title}</span>
        <HotelsSection />
        <AirplaneSection />
      </BaseTemplate>
    </div>
  );
}"""


class TestInspection:

    def test_component_name(self):
        assert gpt_code.extract_component_name(CARD) == "Card"
        assert gpt_code.extract_component_name("export default function Template() {}") == "Template"
        assert gpt_code.extract_component_name("const x = 1;") is None

    def test_used_components_in_order(self):
        assert gpt_code.extract_used_components(CARD) == ["BaseTemplate", "AirplaneSection", "HotelsSection"]

    def test_props(self):
        assert gpt_code.extract_props(CARD) == ["title", "items"]
        assert gpt_code.extract_props("export default function Template() {}") == []

    def test_imports(self):
        code = "import React from 'react';\nimport BaseTemplate from '@/app/Templates/baseTemplate';\n"
        assert gpt_code.extract_imports(code) == [
            "import React from 'react';",
            "import BaseTemplate from '@/app/Templates/baseTemplate';",
        ]
        assert gpt_code.has_react_import(code)

    def test_component_code_strips_imports_and_export(self):
        code = "import React from 'react';\n\nexport default function Card() {}\n"
        assert gpt_code.extract_component_code(code) == "function Card() {}"

    @pytest.mark.parametrize("response, expected", [
        ("raw code", "raw code"),
        ({"jsxCode": "a"}, "a"),
        ({"code": "b"}, "b"),
        ({"content": "c"}, "c"),
        ({"other": 1}, None),
        (42, None),
    ])
    def test_parse_gpt_response(self, response, expected):
        assert gpt_code.parse_gpt_response(response) == expected


class TestValidation:

    def test_valid_component(self):
        result = gpt_code.validate_jsx_structure("import React from 'react';\n\nexport default " + CARD)
        assert result.is_valid
        assert result.warnings == []

    def test_missing_return(self):
        result = gpt_code.validate_jsx_structure("function Card() { const x = 1; }")
        assert not result.is_valid
        assert "No JSX return statement found" in result.errors
        assert "React import may be missing" in result.warnings
        assert result.to_dict()["is_valid"] is False


class TestCleanup:

    def test_fences_stripped_and_export_added(self):
        cleaned = gpt_code.clean_jsx_code("```jsx\n" + CARD + "\n```")
        assert "```" not in cleaned
        assert cleaned.startswith("import React from 'react';\n\n")
        assert "export default function Card(" in cleaned

    def test_template_imports_rewritten(self):
        code = "import BaseTemplate from './templates/base_template';\n\n" + CARD
        fixed = gpt_code.fix_import_paths(code)
        assert "from '@/app/Templates/baseTemplate'" in fixed
        assert fixed.startswith('"use client";\n\n')

    def test_generated_template_gets_no_directive(self):
        code = "import BaseTemplate from '../templates/baseTemplate';\n\nexport default function Template() {}"
        fixed = gpt_code.fix_import_paths(code)
        assert not fixed.startswith('"use client"')
        assert "from '@/app/Templates/baseTemplate'" in fixed

    def test_react_import_after_directive(self):
        code = '"use client";\nimport BaseTemplate from "@/app/Templates/baseTemplate";\n' + CARD
        cleaned = gpt_code.clean_jsx_code(code)
        assert cleaned.startswith('"use client";\n\nimport React from \'react\';\n')

    def test_existing_export_untouched(self):
        code = "import React from 'react';\n\nexport default " + CARD
        assert gpt_code.clean_jsx_code(code).count("export default") == 1

    def test_format_code(self):
        assert gpt_code.format_code("const a = 1;\nexport default A;") == "const a = 1;\n\nexport default A;"
