"""Shared fixtures for core unit tests"""

import pytest

from mdtree.core.models import CustomBlock
from mdtree.core.parse import Parser


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

---

Footer paragraph.
"""

SAMPLE_FM_MD = """\
---
title: Test Doc
slug: test-doc
tags: a, b
---

# Title

Body content.
"""


def _strike_through(text: str) -> CustomBlock:
    return CustomBlock(custom_type="strikeThrough", body=text[2:-2])


def _highlight(text: str) -> CustomBlock:
    return CustomBlock(custom_type="highlight", body=text[2:-2])


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_fm_md")
def sample_fm_md_fixture():
    return SAMPLE_FM_MD


@pytest.fixture(name="strike_through")
def strike_through_fixture():
    return _strike_through


@pytest.fixture(name="parser")
def parser_fixture():
    return Parser()


@pytest.fixture(name="custom_parser")
def custom_parser_fixture(parser):
    return parser.extend(r"~~(.+?)~~", _strike_through).extend(r"==(.+?)==", _highlight)


@pytest.fixture(name="sample_doc")
def sample_doc_fixture(parser):
    return parser.parse(SAMPLE_MD)
