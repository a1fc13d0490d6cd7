"""Inline table extraction, typing, payload encoding, and transport descriptors.

Submodules:
  patterns    -- compiled regex patterns and constant names
  schema      -- Column / Cell / RecordSet / CellAttributes Pydantic models
  attributes  -- cell attribute rewriting (width stripping, marker class)
  dates       -- ordered date-format parsing
  inference   -- per-column type inference
  extractor   -- table tree to RecordSet
  cache       -- overflow cache implementations
  codec       -- JSON + gzip + base64 payload encoding and placement
  descriptor  -- transport descriptor for the query frontend
  macro       -- inline-table macro entry point and engine wiring
"""
