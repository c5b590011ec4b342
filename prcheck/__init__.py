"""
prcheck - change-scoped code standards review for pull requests.

Inspects the lines a pull request actually touched and reports:
- Missing or inconsistent documentation blocks on methods and reactive properties
- Debug statements and TODO/FIXME markers in changed code
- Stylesheet properties that should be expressed as utility classes

Violations are emitted as structured records that can be posted as inline
review comments. Every run is stateless.
"""

__version__ = "0.1.0"
