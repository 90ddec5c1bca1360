"""
Directive scanner tests

Tests marker recognition, option headers, body capture, io-code-block
sub-directives, and language resolution.
"""

import pytest

from rstaudit.lib.scanner import DirectiveScanner, directives_parse, directives_parseFile
from rstaudit.models.directives import Directive, DirectiveType, SubDirective


def scan(source):
    return DirectiveScanner(source).directives_scan()


class TestMarkers:
    """Test marker recognition"""

    def test_empty_source(self):
        """Empty text has no directives"""
        assert scan("") == []

    def test_plain_text(self):
        """Prose and unrelated directives are skipped"""
        source = """
Title
=====

.. note::

   Just a note.
"""
        assert scan(source) == []

    def test_code_block(self):
        """code-block marker with argument"""
        directives = scan(".. code-block:: python\n\n   print(1)\n")

        assert len(directives) == 1
        assert directives[0].type == DirectiveType.CODE_BLOCK
        assert directives[0].argument == "python"
        assert directives[0].line_num == 1

    @pytest.mark.parametrize("name", ["code", "sourcecode"])
    def test_code_aliases(self, name):
        """code and sourcecode are code blocks"""
        directives = scan(f".. {name}:: go\n\n   fmt.Println()\n")

        assert len(directives) == 1
        assert directives[0].type == DirectiveType.CODE_BLOCK
        assert directives[0].argument == "go"

    def test_literalinclude(self):
        """literalinclude keeps the referenced path as argument"""
        directives = scan(".. literalinclude:: /code-examples/tested/python/insert.py\n   :language: python\n")

        assert directives[0].type == DirectiveType.LITERAL_INCLUDE
        assert directives[0].argument == "/code-examples/tested/python/insert.py"
        assert directives[0].options == {"language": "python"}

    def test_indented_marker(self):
        """Markers nested in other blocks are found"""
        source = """
.. tab::
   :tabid: java-sync

   .. code-block:: java

      System.out.println();
"""
        directives = scan(source)

        assert len(directives) == 1
        assert directives[0].line_num == 5
        assert directives[0].content == "System.out.println();"

    def test_document_order(self):
        """Directives come back in document order"""
        source = """
.. code-block:: python

   a = 1

.. literalinclude:: /examples/b.go

.. code-block:: java

   int c;
"""
        directives = scan(source)

        assert [d.type for d in directives] == [
            DirectiveType.CODE_BLOCK,
            DirectiveType.LITERAL_INCLUDE,
            DirectiveType.CODE_BLOCK,
        ]
        assert [d.line_num for d in directives] == [2, 6, 8]


class TestHeaderAndBody:
    """Test option headers and body capture"""

    def test_options_in_order(self):
        """Options accumulate in source order"""
        source = """.. code-block:: javascript
   :copyable: true
   :emphasize-lines: 2
   :caption: Example

   const a = 1;
"""
        directive = scan(source)[0]

        assert list(directive.options) == ["copyable", "emphasize-lines", "caption"]
        assert directive.options["emphasize-lines"] == "2"

    def test_option_without_value(self):
        """Flag options get an empty value"""
        directive = scan(".. code-block:: python\n   :linenos:\n\n   x = 1\n")[0]
        assert directive.options == {"linenos": ""}

    def test_header_stops_at_non_option(self):
        """A non-option line ends the header"""
        source = """.. code-block:: python
   :copyable: true
   x = 1
   :not-an-option: here
"""
        directive = scan(source)[0]

        assert directive.options == {"copyable": "true"}
        assert "x = 1" in directive.content

    def test_body_dedented(self):
        """Body keeps relative indentation"""
        source = """.. code-block:: python

   def f():
       return 1

after
"""
        directive = scan(source)[0]
        assert directive.content == "def f():\n    return 1"

    def test_body_not_rescanned(self):
        """Markup shown inside a code block is not a directive"""
        source = """.. code-block:: rst

   .. code-block:: python

      print("shown, not scanned")

.. code-block:: go

   x := 1
"""
        directives = scan(source)

        assert len(directives) == 2
        assert directives[0].argument == "rst"
        assert directives[1].argument == "go"

    def test_malformed_still_emitted(self):
        """Directives without argument, options or body are kept"""
        directives = scan(".. code-block::\n")

        assert len(directives) == 1
        assert directives[0].argument == ""
        assert directives[0].options == {}
        assert directives[0].content == ""

    def test_tabs_expanded(self):
        """Tab-indented bodies are captured"""
        directive = scan(".. code-block:: python\n\n\tprint(1)\n")[0]
        assert directive.content == "print(1)"


class TestIoCodeBlock:
    """Test io-code-block sub-directives"""

    def test_input_and_output(self):
        """Input and output sub-blocks are captured"""
        source = """.. io-code-block::
   :copyable: true

   .. input:: /code-examples/tested/python/find.py
      :language: python

   .. output:: /code-examples/tested/python/find-output.txt
      :language: json
"""
        directive = scan(source)[0]

        assert directive.type == DirectiveType.IO_CODE_BLOCK
        assert directive.options == {"copyable": "true"}
        assert directive.input.argument == "/code-examples/tested/python/find.py"
        assert directive.input.options == {"language": "python"}
        assert directive.output.argument == "/code-examples/tested/python/find-output.txt"
        assert directive.output.options == {"language": "json"}

    def test_inline_bodies(self):
        """Sub-blocks without paths carry their inline content"""
        source = """.. io-code-block::

   .. input::
      :language: javascript

      db.users.find()

   .. output::
      :language: json

      { "_id": 1 }
"""
        directive = scan(source)[0]

        assert directive.input.content == "db.users.find()"
        assert directive.output.content == '{ "_id": 1 }'

    def test_missing_output(self):
        """An io-code-block may have only an input"""
        source = ".. io-code-block::\n\n   .. input::\n      :language: python\n\n      x = 1\n"
        directive = scan(source)[0]

        assert directive.input is not None
        assert directive.output is None

    def test_sub_markers_do_not_leak(self):
        """Input/output markers outside an io-code-block are ignored"""
        assert scan(".. input:: foo.py\n") == []


class TestLanguageResolution:
    """Test language precedence rules"""

    def test_argument_over_option(self):
        """code-block argument beats :language: option"""
        directive = Directive(DirectiveType.CODE_BLOCK, argument="python", options={"language": "javascript"})
        assert directive.language_resolve() == "python"

    def test_option_when_no_argument(self):
        """:language: option is used without argument"""
        directive = Directive(DirectiveType.CODE_BLOCK, options={"language": "Go"})
        assert directive.language_resolve() == "go"

    def test_undefined(self):
        """No argument and no option gives undefined"""
        assert Directive(DirectiveType.CODE_BLOCK).language_resolve() == "undefined"

    def test_literalinclude_option_over_extension(self):
        """literalinclude prefers :language: over the extension"""
        directive = Directive(DirectiveType.LITERAL_INCLUDE, argument="/a/b.js", options={"language": "typescript"})
        assert directive.language_resolve() == "typescript"

    def test_literalinclude_extension(self):
        """literalinclude infers language from the extension"""
        assert Directive(DirectiveType.LITERAL_INCLUDE, argument="/a/b.py").language_resolve() == "python"

    def test_literalinclude_unknown_extension(self):
        """Unrecognized extension gives undefined"""
        assert Directive(DirectiveType.LITERAL_INCLUDE, argument="/a/b.unknown").language_resolve() == "undefined"

    def test_sub_directive_precedence(self):
        """Own option, then extension, then parent option"""
        parent = {"language": "javascript"}

        assert SubDirective(argument="x.py", options={"language": "json"}).language_resolve(parent) == "json"
        assert SubDirective(argument="x.py").language_resolve(parent) == "python"
        assert SubDirective().language_resolve(parent) == "javascript"
        assert SubDirective().language_resolve() == "undefined"

    def test_literalinclude_alias_normalized(self):
        """literalinclude :language: aliases fold to canonical names"""
        directive = Directive(DirectiveType.LITERAL_INCLUDE, argument="/a.txt", options={"language": "ts"})
        assert directive.language_resolve() == "typescript"

    def test_sub_directive_alias_normalized(self):
        """Sub-block aliases fold, and none means undefined"""
        assert SubDirective(options={"language": "none"}).language_resolve({}) == "undefined"
        assert SubDirective(options={"language": "sh"}).language_resolve() == "shell"
        assert SubDirective().language_resolve({"language": "py"}) == "python"

    def test_code_block_alias_kept(self):
        """code-block languages are reported as written"""
        assert Directive(DirectiveType.CODE_BLOCK, argument="ts").language_resolve() == "ts"
        assert Directive(DirectiveType.YAML_CODE_BLOCK, argument="sh").language_resolve() == "sh"


class TestParseEntryPoints:
    """Test directives_parse / directives_parseFile"""

    def test_yaml_file_merges_legacy_steps(self):
        """YAML files include legacy action blocks in line order"""
        source = """title: First
content: |
  .. code-block:: python

     print(1)
---
title: Second
action:
  language: sh
  code: |
    npm install mongodb
"""
        directives = directives_parse(source, "steps-install.yaml")

        assert [d.type for d in directives] == [DirectiveType.CODE_BLOCK, DirectiveType.YAML_CODE_BLOCK]
        assert directives[0].argument == "python"
        assert directives[1].argument == "sh"
        assert directives[1].content == "npm install mongodb"

    def test_rst_file_skips_legacy_parser(self):
        """Non-YAML files never produce yaml-code-blocks"""
        source = "action:\n  language: sh\n  code: ls\n"
        assert directives_parse(source, "page.txt") == []

    def test_parse_file(self, tmp_path):
        """Files are read as UTF-8"""
        page = tmp_path / "page.txt"
        page.write_text(".. code-block:: python\n\n   print('é')\n", encoding="utf-8")

        directives = directives_parseFile(page)
        assert directives[0].content == "print('é')"

    def test_parse_missing_file(self, tmp_path):
        """Missing files raise OSError"""
        with pytest.raises(OSError):
            directives_parseFile(tmp_path / "missing.txt")

    def test_idempotent(self):
        """Scanning the same text twice gives equal results"""
        source = ".. io-code-block::\n\n   .. input:: a.py\n\n.. code-block:: go\n\n   x\n"
        assert directives_parse(source) == directives_parse(source)
