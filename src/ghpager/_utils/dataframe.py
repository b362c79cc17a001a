"""DataFrame conversion utilities."""

import json
from typing import Iterable

import pandas as pd

from ghpager.stream import Row


def rows_to_dataframe(
    rows: Iterable[Row],
    parse_bodies: bool = False,
) -> pd.DataFrame:
    """
    Convert page rows to a pandas DataFrame with url and body columns.
    
    Args:
        rows: Iterable of Row (e.g. a PageStream)
        parse_bodies: If True, decode each body from JSON text
        
    Returns:
        pandas DataFrame with one row per page
        
    Example:
        df = rows_to_dataframe(client.pages("repos/duckdb/duckdb/issues"))
        print(df["url"].tolist())
    """
    df = pd.DataFrame([row._asdict() for row in rows], columns=list(Row._fields))
    
    if parse_bodies and not df.empty:
        df["body"] = df["body"].map(json.loads)
    
    return df


def json_array_to_dataframe(body: str) -> pd.DataFrame:
    """
    Flatten a merged JSON body into a DataFrame, one row per element.
    
    Nested objects become dotted columns (e.g. "user.login"). A body that
    holds a single object yields a one-row frame; a bare scalar, or an
    array of scalars, becomes a single "value" column.
    """
    data = json.loads(body)
    if not isinstance(data, list):
        data = [data]
    if all(isinstance(item, dict) for item in data):
        return pd.json_normalize(data)
    return pd.DataFrame({"value": data})
