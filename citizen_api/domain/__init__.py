"""Pure domain rules: status values/policies and tracking identifiers."""
