"""Domain contexts for folio (styling, templating, composition, rendering)."""
