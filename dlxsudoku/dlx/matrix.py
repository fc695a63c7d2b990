"""Dancing Links (DLX) matrix and Knuth's Algorithm X for exact cover."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)


class SolutionListener(Protocol):
    """Receives each exact cover found by :meth:`ExactCoverMatrix.search`."""

    def solution_found(self, rows: List[int]) -> bool:
        """
        Args:
            rows: One node index per selected row, in selection order.

        Returns:
            True to stop the search, False to keep looking.
        """
        ...


ListenerLike = Union[SolutionListener, Callable[[List[int]], bool]]


@dataclass
class SearchStats:
    """Counters from one search."""
    solutions: int = 0
    nodes: int = 0          # rows tried
    updates: int = 0        # links removed by covering
    stopped: bool = False   # a listener asked to stop


class ExactCoverMatrix:
    """
    A sparse 0/1 matrix stored as circular doubly linked lists.

    Nodes live in parallel arrays and are addressed by index:

    - node 0 is the root header,
    - nodes 1..C are the column headers (column ``i`` is node ``i + 1``),
    - every node after that belongs to a row.

    Each column header keeps a count of the live nodes below it. Covering a
    column splices it and every row crossing it out of the structure in O(1)
    per node; uncovering restores them in exact reverse order, which is what
    lets the search backtrack without rebuilding anything.

    Primary columns must be covered exactly once. Secondary columns are not
    linked into the header list; they may be covered at most once.

    Each row node carries an opaque integer payload chosen by the client,
    used to turn a solution back into domain moves.
    """

    ROOT = 0

    def __init__(self, num_columns: int, num_secondary: int = 0):
        """
        Create an empty matrix.

        Args:
            num_columns: Number of primary columns.
            num_secondary: Number of secondary columns, numbered after the
                primary ones.
        """
        total = num_columns + num_secondary
        self.num_columns = num_columns
        self.num_secondary = num_secondary

        headers = range(total + 1)
        self.left: List[int] = list(headers)
        self.right: List[int] = list(headers)
        self.up: List[int] = list(headers)
        self.down: List[int] = list(headers)
        self.column: List[int] = list(headers)
        self.payload: List[int] = [-1] * (total + 1)
        self.size: List[int] = [0] * (total + 1)

        # Primary headers form the circular list headed by the root.
        for i in range(num_columns + 1):
            self.right[i] = (i + 1) % (num_columns + 1)
            self.left[i] = (i - 1) % (num_columns + 1)

        self.num_rows = 0
        self.stats = SearchStats()
        self._solution: List[int] = []

    def add_row(self, columns: Sequence[int], payload: int) -> int:
        """
        Append a row with a 1 in each of the given columns.

        Columns must be distinct and in range; that is not checked.

        Args:
            columns: Column indices (0-based) covered by this row.
            payload: Client value stored on every node of the row.

        Returns:
            The index of the row's first node.
        """
        if not columns:
            raise ValueError("A row must cover at least one column")

        first = len(self.left)
        count = len(columns)
        for offset, col in enumerate(columns):
            node = first + offset
            header = col + 1

            # Link horizontally (circular)
            self.left.append(first + (offset - 1) % count)
            self.right.append(first + (offset + 1) % count)

            # Link vertically (insert above column header)
            self.up.append(self.up[header])
            self.down.append(header)
            self.down[self.up[header]] = node
            self.up[header] = node

            self.column.append(header)
            self.payload.append(payload)
            self.size[header] += 1

        self.num_rows += 1
        return first

    def payload_of(self, node: int) -> int:
        return self.payload[node]

    def column_of(self, node: int) -> int:
        """0-based column index of a row node."""
        return self.column[node] - 1

    def row_nodes(self, node: int) -> List[int]:
        """All nodes of the row containing ``node``, starting with ``node``."""
        nodes = [node]
        j = self.right[node]
        while j != node:
            nodes.append(j)
            j = self.right[j]
        return nodes

    def live_columns(self) -> List[int]:
        """0-based indices of the primary columns still linked into the header list."""
        cols = []
        c = self.right[self.ROOT]
        while c != self.ROOT:
            cols.append(c - 1)
            c = self.right[c]
        return cols

    def snapshot(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Copy of the link structure and column counts.

        Two snapshots are equal exactly when every node is linked the same way.
        """
        links = np.array([self.left, self.right, self.up, self.down, self.column], dtype=np.int64)
        return links, np.array(self.size, dtype=np.int64)

    # ------------------------------------------------------------------
    # Algorithm X
    # ------------------------------------------------------------------

    def search(self, listener: ListenerLike) -> SearchStats:
        """
        Run a full depth-first search for exact covers.

        The listener is called once per cover with the list of selected row
        nodes; returning True stops the search early. The matrix is left
        exactly as it was before the call, whether or not it stopped early.

        Args:
            listener: A :class:`SolutionListener` or a plain callable.

        Returns:
            Counters for this search.
        """
        callback = getattr(listener, "solution_found", listener)
        self.stats = SearchStats()
        self._solution = []
        self.stats.stopped = self._search(callback)
        logger.debug(
            "Exact cover search: %d solutions, %d nodes%s",
            self.stats.solutions, self.stats.nodes, " (stopped)" if self.stats.stopped else "",
        )
        return self.stats

    def solve(self, limit: Optional[int] = None) -> List[List[int]]:
        """
        Collect exact covers as lists of payloads.

        Args:
            limit: Stop after this many covers. None for all of them.
        """
        found: List[List[int]] = []

        def collect(rows: List[int]) -> bool:
            found.append([self.payload[node] for node in rows])
            return limit is not None and len(found) >= limit

        self.search(collect)
        return found

    def _search(self, callback: Callable[[List[int]], bool]) -> bool:
        """Recursive step of Algorithm X. Returns True when the search must stop."""
        right = self.right
        if right[self.ROOT] == self.ROOT:
            self.stats.solutions += 1
            return bool(callback(list(self._solution)))

        col = self._choose_column()
        self._cover(col)

        stop = False
        down = self.down
        left = self.left
        column = self.column
        r = down[col]
        while r != col:
            self._solution.append(r)
            self.stats.nodes += 1

            j = right[r]
            while j != r:
                self._cover(column[j])
                j = right[j]

            stop = self._search(callback)

            j = left[r]
            while j != r:
                self._uncover(column[j])
                j = left[j]
            self._solution.pop()

            if stop:
                break
            r = down[r]

        self._uncover(col)
        return stop

    def _choose_column(self) -> int:
        """Column with the fewest live nodes (MRV heuristic), first one on ties."""
        right = self.right
        size = self.size
        best = right[self.ROOT]
        min_size = size[best]
        c = right[best]
        while c != self.ROOT and min_size > 0:
            if size[c] < min_size:
                min_size = size[c]
                best = c
            c = right[c]
        return best

    def _cover(self, col: int) -> None:
        """Cover a column (remove it and all rows using it)."""
        left, right, up, down, column, size = (
            self.left, self.right, self.up, self.down, self.column, self.size
        )
        right[left[col]] = right[col]
        left[right[col]] = left[col]
        updates = 1

        i = down[col]
        while i != col:
            j = right[i]
            while j != i:
                up[down[j]] = up[j]
                down[up[j]] = down[j]
                size[column[j]] -= 1
                updates += 1
                j = right[j]
            i = down[i]
        self.stats.updates += updates

    def _uncover(self, col: int) -> None:
        """Uncover a column (restore it and all rows using it)."""
        left, right, up, down, column, size = (
            self.left, self.right, self.up, self.down, self.column, self.size
        )
        i = up[col]
        while i != col:
            j = left[i]
            while j != i:
                size[column[j]] += 1
                up[down[j]] = j
                down[up[j]] = j
                j = left[j]
            i = up[i]

        right[left[col]] = col
        left[right[col]] = col

    def __repr__(self) -> str:
        return (f"ExactCoverMatrix(columns={self.num_columns}, "
                f"secondary={self.num_secondary}, rows={self.num_rows})")
