"""Tab-delimited and FASTA input tables."""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Set, Union

import pandas as pd

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def require_file(path: PathLike, description: str) -> Path:
    """
    Verify that an input file exists and is a regular file.

    Raises:
        FileNotFoundError: If the file is missing or not a file
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"{description} {path} is not found or unreadable.")
    return path


def read_table(path: PathLike) -> pd.DataFrame:
    """
    Read a headered tab-delimited file with every column as a string.

    Empty cells stay empty strings; no value is coerced to NaN.
    """
    return pd.read_csv(
        path,
        sep="\t",
        dtype=str,
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
    )


def read_id_set(path: PathLike, description: str = "ID file") -> Set[str]:
    """
    Read the first column of a headered tab-delimited file as a set.

    Args:
        path: Input file
        description: What the file is, for error messages

    Returns:
        Set of IDs found in the first column
    """
    path = require_file(path, description)
    df = read_table(path)
    if df.shape[1] == 0:
        return set()
    ids = {value.strip() for value in df.iloc[:, 0] if value.strip()}
    logger.info(f"{len(ids)} class IDs read from {path}.")
    return ids


def read_name_table(path: PathLike) -> Dict[str, str]:
    """
    Read an ID-to-name map from the first two columns of a headered table.
    """
    path = require_file(path, "Name file")
    df = read_table(path)
    if df.shape[1] < 2:
        raise ValueError(f"Name file {path} must have at least two columns.")
    names = dict(zip(df.iloc[:, 0], df.iloc[:, 1]))
    logger.info(f"{len(names)} names read from {path}.")
    return names


def read_family_table(path: PathLike) -> pd.DataFrame:
    """
    Read a protein family definition table.

    The table must have ``fam_id``, ``product`` and ``md5`` columns.
    """
    path = require_file(path, "Family definition file")
    df = read_table(path)
    missing = [col for col in ("fam_id", "product", "md5") if col not in df.columns]
    if missing:
        raise ValueError(f"Family definition file {path} is missing columns: {', '.join(missing)}")
    return df


def read_fasta_labels(path: PathLike) -> Dict[str, str]:
    """
    Read the labels and comments of a FASTA file.

    Returns:
        Map of sequence label -> comment (text after the first space)
    """
    path = require_file(path, "FASTA file")
    labels: Dict[str, str] = {}
    with open(path) as fh:
        for line in fh:
            if line.startswith(">"):
                header = line[1:].rstrip("\n").rstrip("\r")
                label, _, comment = header.partition(" ")
                labels[label] = comment.strip()
    return labels


def split_line(line: str) -> List[str]:
    """Split a tab-delimited line into fields."""
    return line.rstrip("\r\n").split("\t")
