"""Tests for the code block extractor."""

from codemend.editing.document import Document
from codemend.editing.extractor import extract_code, extract_code_block, has_fence


class TestExtractCodeBlock:
    def test_reply_with_prose_around_block(self):
        reply = "Here you go:\n```\nfoo\nbar\n```\nHope that helps"
        assert extract_code_block(reply).lines == ("foo", "bar")

    def test_language_tag_is_ignored(self):
        reply = "```python\ndef f():\n    return 1\n```\n"
        assert extract_code_block(reply).lines == ("def f():", "    return 1")

    def test_no_fence_returns_empty_document(self):
        result = extract_code_block("I could not change this file.\nSorry.")
        assert result == Document()
        assert result.is_empty

    def test_empty_reply(self):
        assert extract_code_block("").is_empty

    def test_unterminated_block_collects_to_end(self):
        reply = "text\n```js\nconst a = 1;\nconst b = 2;"
        assert extract_code_block(reply).lines == ("const a = 1;", "const b = 2;")

    def test_indented_fences_are_recognised(self):
        reply = "  ```\n  x = 1\n    ```\nafter"
        assert extract_code_block(reply).lines == ("  x = 1",)

    def test_only_first_block_is_taken(self):
        reply = "```\nfirst\n```\nand also\n```\nsecond\n```"
        assert extract_code_block(reply).lines == ("first",)

    def test_empty_block(self):
        assert extract_code_block("```\n```").is_empty

    def test_wrapping_a_document_round_trips(self):
        doc = Document.from_lines(["import os", "", "print(os.getcwd())"])
        reply = "Sure!\n```python\n" + doc.text + "\n```\nDone."
        assert extract_code_block(reply) == doc

    def test_crlf_reply(self):
        reply = "intro\r\n```\r\nfoo\r\nbar\r\n```\r\n"
        assert extract_code_block(reply).lines == ("foo", "bar")


def test_extract_code_joins_lines():
    assert extract_code("```\na\nb\n```") == "a\nb"


def test_has_fence():
    assert has_fence("x\n```\ny")
    assert not has_fence("no code here")
