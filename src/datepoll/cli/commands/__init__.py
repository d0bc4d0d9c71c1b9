"""CLI command groups for datepoll.

Command groups:
- groups: Expand, count, label and format date groups
- config: Show and change persisted settings
"""
