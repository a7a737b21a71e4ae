"""Shared fixtures for core unit tests"""

import pytest


REPORT_HTML = """\
<html><head><title>ignored</title><style>p { color: red }</style></head>
<body>
  <h1>Q4 Report</h1>
  <h2>Revenue</h2>
  <table>
    <tr><th>Month</th><th>Revenue</th></tr>
    <tr><td>Jan</td><td>100</td></tr>
    <tr><td>Feb</td><td>120</td></tr>
    <tr><td>Mar</td><td>135</td></tr>
    <tr><td>Apr</td><td>150</td></tr>
    <tr><td>May</td><td>160</td></tr>
    <tr><td>Jun</td><td>180</td></tr>
  </table>
  <h2>Team</h2>
  <ul><li>Alice</li><li>Bob</li><li>Carol</li></ul>
</body></html>
"""

SAMPLE_MD = """\
---
title: Test Doc
slug: test-doc
---

# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```
"""


@pytest.fixture(name="report_root")
def report_root_fixture(root_of):
    return root_of(REPORT_HTML)


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD
