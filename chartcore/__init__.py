"""Core (renderer-agnostic) chart logic.

This package contains:
- data loading (CSV -> pandas -> TabularRecordSet)
- series aggregation per age group / region
- scale domains, legend selection and nearest-point lookup
- chart controllers emitting declarative draw instructions
- chart helpers (Altair -> Vega-Lite spec dict)
"""
