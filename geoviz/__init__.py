# GeoViz - Source Package
"""
GeoViz: survey data transformation for VLF and DC resistivity readings.

This package provides:
- Delimited text parsing into numeric row records
- VLF in-phase/quadrature series with KH derivative filter
- Apparent resistivity series grouped by electrode spacing
- Render request assembly for an external chart renderer
"""

__version__ = "2.0.0"
