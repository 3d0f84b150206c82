"""Utility package exports for GeoViz."""

from geoviz.utils.io import (
    export_render_request_csv,
    read_survey_file,
    render_request_to_dataframe,
)
from geoviz.utils.samples import (
    generate_resistivity_sample,
    generate_sample,
    generate_vlf_sample,
)

__all__ = [
    "export_render_request_csv",
    "generate_resistivity_sample",
    "generate_sample",
    "generate_vlf_sample",
    "read_survey_file",
    "render_request_to_dataframe",
]
