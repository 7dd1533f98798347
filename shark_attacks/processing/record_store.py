"""
shark_attacks/processing/record_store.py - Working table of incident rows

Thin wrapper over a pandas DataFrame. Every cleaning pass receives the
store, mutates it in place and returns it, so the pipeline reads as a chain
of passes over one explicit table value.

Predicates are vectorized: `predicate(df) -> boolean Series`.
Value functions work row by row: `value_fn(row) -> value` (a plain constant
is accepted too).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

import pandas as pd

from shark_attacks.incidents.schema import canonical_column
from shark_attacks.utils.text_utils import is_null

Predicate = Callable[[pd.DataFrame], pd.Series]
ValueFn = Union[Callable[[pd.Series], Any], Any]


def none_for_missing(df: pd.DataFrame) -> pd.DataFrame:
    """Object dtype everywhere, None as the only missing marker."""
    df = df.astype(object)
    for col in df.columns:
        df[col] = _none_series(df[col].tolist(), df.index)
    return df


def _none_series(values: List[Any], index: pd.Index) -> pd.Series:
    return pd.Series([None if is_null(v) else v for v in values], index=index, dtype=object)


@dataclass
class RecordStore:
    df: pd.DataFrame

    @classmethod
    def load(cls, rows: Union[pd.DataFrame, Iterable[Dict[str, Any]]]) -> "RecordStore":
        """
        Build a store from a DataFrame or a list of dicts.

        Headers are folded onto the canonical snake_case names and the
        original arrival order becomes the index.
        """
        df = rows.copy() if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows))
        df = df.rename(columns={c: canonical_column(c) for c in df.columns})
        df = df.loc[:, ~df.columns.duplicated()]
        df = df.reset_index(drop=True)
        return cls(none_for_missing(df))

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.df)

    @property
    def columns(self) -> List[str]:
        return list(self.df.columns)

    def has_column(self, name: str) -> bool:
        return name in self.df.columns

    def rows(self) -> Iterator[Dict[str, Any]]:
        for record in self.df.to_dict(orient="records"):
            yield record

    def column(self, name: str) -> pd.Series:
        return self.df[name]

    def copy(self) -> "RecordStore":
        return RecordStore(self.df.copy())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_column(self, name: str, default: Any = None) -> None:
        if name in self.df.columns:
            raise ValueError(f"Column already exists: {name}")
        self.df[name] = pd.Series([default] * len(self.df), index=self.df.index, dtype=object)

    def drop_column(self, name: str) -> bool:
        """Drop a column; returns False when it was not there."""
        if name not in self.df.columns:
            return False
        self.df = self.df.drop(columns=[name])
        return True

    def delete(self, predicate: Predicate) -> int:
        """Remove the rows matching the predicate and return how many went."""
        mask = self._mask(predicate)
        removed = int(mask.sum())
        if removed:
            self.df = self.df.loc[~mask]
        return removed

    def delete_all_null_rows(self) -> int:
        """Rows with no value in any column (spreadsheet padding)."""
        return self.delete(lambda df: df.isna().all(axis=1))

    def bulk_update(self, predicate: Optional[Predicate], field: str, value_fn: ValueFn) -> int:
        """
        Set `field` on every matching row (all rows when predicate is None).

        Returns the number of rows whose value actually changed.
        """
        if field not in self.df.columns:
            raise ValueError(f"Unknown column: {field}")

        mask = self._mask(predicate) if predicate is not None else pd.Series(True, index=self.df.index)
        if not mask.any():
            return 0

        target = self.df.loc[mask]
        if callable(value_fn):
            records = target.to_dict(orient="records")
            new_values = [value_fn(_row(rec)) for rec in records]
        else:
            new_values = [value_fn] * len(target)
        new_values = [None if is_null(v) else v for v in new_values]

        old_values = [None if is_null(v) else v for v in target[field].tolist()]
        changed = sum(1 for old, new in zip(old_values, new_values) if not _same(old, new))

        merged = dict(zip(self.df.index, self.df[field].tolist()))
        merged.update(zip(target.index, new_values))
        self.df[field] = _none_series([merged[i] for i in self.df.index], self.df.index)
        return changed

    def map_column(self, field: str, fn: Callable[[Any], Any]) -> int:
        """Apply a single-value function to every cell of one column."""
        return self.bulk_update(None, field, lambda row: fn(row[field]))

    def replace_frame(self, df: pd.DataFrame) -> None:
        self.df = none_for_missing(df)

    def _mask(self, predicate: Predicate) -> pd.Series:
        mask = predicate(self.df)
        return pd.Series(mask, index=self.df.index).fillna(False).astype(bool)


def _row(record: Dict[str, Any]) -> pd.Series:
    return pd.Series({k: None if is_null(v) else v for k, v in record.items()}, dtype=object)


def _same(a: Any, b: Any) -> bool:
    if a is None or b is None:
        return a is None and b is None
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False
