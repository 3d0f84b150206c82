# GeoViz Core Module
"""
Core transformation logic for GeoViz.

Contains:
- Record parsing of delimited survey text
- VLF transform with KH derivative filter
- Resistivity transform with spacing groups
- Series assembly into render requests
- Plot session orchestration
"""
