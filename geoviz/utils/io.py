"""File decoding and tabular export helpers."""

from __future__ import annotations

import csv
import io
from pathlib import Path

import pandas as pd
from loguru import logger

from geoviz.core.assembler import RenderRequest

MAX_COLUMNS = 7
DELIMITER_CANDIDATES = ",\t; |"
EXPORT_COLUMNS = ["series", "x", "y"]


def decode_bytes(raw: bytes) -> str:
    """Decode file bytes as UTF-8 (BOM tolerated), falling back to Latin-1."""
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("File is not valid UTF-8, decoding as Latin-1")
        return raw.decode("latin-1")


def normalize_delimited_text(text: str) -> str:
    """Re-join delimited rows with tabs.

    The delimiter is sniffed by pandas from the first row; a first row
    without any candidate delimiter leaves the lines as they are. Quoted fields
    are unquoted and missing cells dropped, so 6- and 7-column resistivity
    rows both keep every value they carry. Cells past ``MAX_COLUMNS`` are
    cut, as no survey format reads them.

    Parameters
    ----------
    text : str
        Decoded file content.

    Returns
    -------
    str
        Tab-joined rows, one per line.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return ""
    if not any(ch in lines[0] for ch in DELIMITER_CANDIDATES):
        return "\n".join(line.strip() for line in lines)
    try:
        table = pd.read_csv(
            io.StringIO("\n".join(lines)),
            sep=None,
            engine="python",
            header=None,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            names=list(range(MAX_COLUMNS)),
            skip_blank_lines=True,
            skipinitialspace=True,
            on_bad_lines=lambda fields: fields[:MAX_COLUMNS],
        )
    except (csv.Error, pd.errors.ParserError) as e:
        logger.debug(f"Delimiter sniffing failed, keeping raw lines: {e}")
        return "\n".join(line.strip() for line in lines)
    out_lines = []
    for row in table.itertuples(index=False, name=None):
        fields = [cell.strip() for cell in row if pd.notna(cell) and cell.strip()]
        out_lines.append("\t".join(fields))
    return "\n".join(out_lines)


def read_survey_file(file_path: str | Path) -> str:
    """Read an uploaded survey file into raw text for the parser.

    Parameters
    ----------
    file_path : str | Path
        Delimited text file (CSV, TSV, space separated).

    Returns
    -------
    str
        Tab-joined rows ready for ``parse_records``.
    """
    path = Path(file_path)
    text = normalize_delimited_text(decode_bytes(path.read_bytes()))
    logger.info(f"Read {len(text.splitlines())} line(s) from {path}")
    return text


def render_request_to_dataframe(request: RenderRequest) -> pd.DataFrame:
    """Flatten request series into a long table.

    Returns
    -------
    pandas.DataFrame
        Columns ``series, x, y`` in series emission order, points in
        series order.
    """
    rows = [
        {"series": item.label, "x": x, "y": y}
        for item in request.series
        for x, y in item.points
    ]
    if not rows:
        return pd.DataFrame(columns=EXPORT_COLUMNS)
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_render_request_csv(request: RenderRequest, output_path: str | Path) -> Path:
    """Write request series to CSV and return the written path."""
    path = Path(output_path)
    if path.suffix.lower() != ".csv":
        path = path.with_suffix(".csv")
    path.parent.mkdir(parents=True, exist_ok=True)
    render_request_to_dataframe(request).to_csv(path, index=False, encoding="utf-8")
    logger.info(f"Exported series to {path}")
    return path
