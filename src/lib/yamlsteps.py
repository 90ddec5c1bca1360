"""
Legacy YAML steps parser

Older steps and extracts files define code examples as YAML data instead of
RST directives:

    title: Download the file
    stepnum: 1
    action:
      - pre: "Run this command:"
        language: sh
        code: |
          curl -LO https://example.com/file.tgz

Each action with both a language and code becomes a yaml-code-block
Directive, so it flows through the same classification as RST directives.
"""

from typing import Any, Dict, List

import yaml

from ..models.directives import Directive, DirectiveType


YAML_EXTENSIONS = (".yaml", ".yml")


def actions_extract(step: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Return the action mappings of a step

    The action field may be a single mapping or a list of mappings.
    """
    action = step.get("action")
    if isinstance(action, list):
        return [item for item in action if isinstance(item, dict)]
    if isinstance(action, dict):
        return [action]
    return []


def yamlSteps_parse(source: str) -> List[Directive]:
    """
    Extract yaml-code-block directives from a multi-document YAML text

    Documents that are empty, end markers, or fail to parse are skipped.
    Each directive's line number is the first non-blank line of its document.

    Args:
        source: YAML file contents

    Returns:
        Directives in document order
    """
    directives: List[Directive] = []
    line_num = 1

    for document in source.split("\n---"):
        doc_lines = document.split("\n")
        offset = next((i for i, line in enumerate(doc_lines) if line.strip()), 0)
        doc_line = line_num
        line_num += document.count("\n") + 1

        if document.strip() in ("", "..."):
            continue

        try:
            step = yaml.safe_load(document)
        except yaml.YAMLError:
            continue
        if not isinstance(step, dict):
            continue

        for action in actions_extract(step):
            code = action.get("code")
            language = action.get("language")
            if not isinstance(code, str) or not isinstance(language, str):
                continue
            if not code or not language:
                continue
            directives.append(Directive(
                type=DirectiveType.YAML_CODE_BLOCK,
                argument=language,
                options={"language": language},
                line_num=doc_line + offset,
                content=code.strip(),
            ))

    return directives
