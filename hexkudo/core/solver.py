"""
Solver / validator for Hexkudo grids.

Given a grid, a partial numbering (cell -> number) and optional links (pairs
of cells holding consecutive numbers), the solver decides whether the numbering
has zero, exactly one, or more than one completion to a Hamiltonian path.

Two phases share one search state:
- Forced-move propagation: for each unplaced number next to a placed number,
  list the cells it can legally take; a single legal cell is placed at once.
- Backtracking search: when propagation stalls, branch on the number with the
  fewest legal cells (lowest number on ties), cells in ascending coordinate
  order. The search uses an explicit stack and an undo trail, and stops at the
  second completion.

Legality of "number k in cell x" combines:
- x is empty and k is unplaced
- graph distance from the nearest placed numbers below and above k
- links touching x or the cells holding k - 1 and k + 1
"""
import logging
from bisect import bisect_left, insort
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from hexkudo.config import SolverConfig
from hexkudo.core.errors import SearchBudgetExceeded
from hexkudo.core.hex_grid import HexGrid
from hexkudo.core.path import Path
from hexkudo.core.types import Cell, SolverStats, SolverStatus, ValidationError

logger = logging.getLogger(__name__)

Link = Tuple[Cell, Cell]


@dataclass
class SolverResult:
    """Outcome of a solve plus the statistics of the search."""
    status: SolverStatus
    solution: Optional[Path] = None
    stats: SolverStats = field(default_factory=SolverStats)

    @property
    def is_unique(self) -> bool:
        return self.status == SolverStatus.UNIQUE


class _Inconsistent(Exception):
    """Initial numbering violates a constraint."""


def normalize_links(grid: HexGrid, links: Iterable[Sequence[Cell]]) -> List[Link]:
    """
    Validate and normalise links to sorted cell pairs.

    Raises:
        ValueError: A link endpoint is outside the grid or the cells are not adjacent
    """
    result = set()
    for pair in links:
        a, b = (tuple(pair[0]), tuple(pair[1]))
        if a not in grid or b not in grid:
            raise ValueError(f"Link {a}-{b} references a cell outside the grid")
        if b not in grid.neighbors(a):
            raise ValueError(f"Link {a}-{b} joins non-adjacent cells")
        result.add(tuple(sorted((a, b))))
    return sorted(result)


class _SearchState:
    """Mutable numbering with an undo trail; owned by a single solve call."""

    def __init__(self, grid: HexGrid, assignment: Mapping[Cell, int], links: Sequence[Link]):
        self.grid = grid
        self.n = len(grid)
        self.pos: List[Optional[Cell]] = [None] * (self.n + 2)
        self.val: Dict[Cell, int] = {}
        self.placed: List[int] = []
        self.trail: List[int] = []

        self.partners: Dict[Cell, Tuple[Cell, ...]] = {}
        for a, b in links:
            self.partners[a] = self.partners.get(a, ()) + (b,)
            self.partners[b] = self.partners.get(b, ()) + (a,)

        for cell, number in assignment.items():
            cell = (int(cell[0]), int(cell[1]))
            if cell not in grid:
                raise ValueError(f"Cell {cell} is not in the grid")
            if isinstance(number, bool) or int(number) != number:
                raise ValueError(f"Number {number!r} at {cell} is not an integer")
            number = int(number)
            if not 1 <= number <= self.n:
                raise ValueError(f"Value {number} out of range (1-{self.n})")
            if self.pos[number] is not None:
                raise _Inconsistent(f"Duplicate value {number}")
            self.place(number, cell)

        self._check_initial()

    # ------------------------------------------------------------------
    # placement and undo
    # ------------------------------------------------------------------

    def place(self, number: int, cell: Cell) -> None:
        self.pos[number] = cell
        self.val[cell] = number
        insort(self.placed, number)
        self.trail.append(number)

    def undo_to(self, mark: int) -> None:
        while len(self.trail) > mark:
            number = self.trail.pop()
            cell = self.pos[number]
            self.pos[number] = None
            del self.val[cell]
            del self.placed[bisect_left(self.placed, number)]

    def is_complete(self) -> bool:
        return len(self.placed) == self.n

    # ------------------------------------------------------------------
    # constraints
    # ------------------------------------------------------------------

    def _check_initial(self) -> None:
        for cell, partners in self.partners.items():
            if len(partners) > 2:
                raise _Inconsistent(f"Cell {cell} has {len(partners)} links")
            number = self.val.get(cell)
            if number is None:
                continue
            if len(partners) == 2 and number in (1, self.n):
                raise _Inconsistent(f"Endpoint {number} at {cell} cannot have two links")
            for p in partners:
                other = self.val.get(p)
                if other is not None and abs(other - number) != 1:
                    raise _Inconsistent(f"Linked cells {cell} and {p} hold {number} and {other}")
        for a, b in zip(self.placed, self.placed[1:]):
            if self.grid.distance(self.pos[a], self.pos[b]) > b - a:
                raise _Inconsistent(
                    f"{a} at {self.pos[a]} cannot reach {b} at {self.pos[b]} in {b - a} steps"
                )

    def feasible(self, number: int, cell: Cell) -> bool:
        """Necessary conditions for writing `number` into `cell`."""
        if cell in self.val or self.pos[number] is not None:
            return False

        placed = self.placed
        idx = bisect_left(placed, number)
        if idx > 0:
            low = placed[idx - 1]
            if self.grid.distance(self.pos[low], cell) > number - low:
                return False
        if idx < len(placed):
            high = placed[idx]
            if self.grid.distance(cell, self.pos[high]) > high - number:
                return False

        partners = self.partners.get(cell)
        if partners:
            if len(partners) == 2 and number in (1, self.n):
                return False
            for p in partners:
                other = self.val.get(p)
                if other is not None and abs(other - number) != 1:
                    return False

        # The neighbours-in-sequence of `cell` must keep their own links satisfiable
        for adjacent_number in (number - 1, number + 1):
            if not 1 <= adjacent_number <= self.n:
                continue
            anchor = self.pos[adjacent_number]
            if anchor is None:
                continue
            anchor_partners = self.partners.get(anchor)
            if not anchor_partners or cell in anchor_partners:
                continue
            if len(anchor_partners) >= 2:
                return False
            # The single partner must take the other number next to adjacent_number
            other = 2 * adjacent_number - number
            if not 1 <= other <= self.n:
                return False
            partner = anchor_partners[0]
            if self.pos[other] is not None and self.pos[other] != partner:
                return False
            partner_value = self.val.get(partner)
            if partner_value is not None and partner_value != other:
                return False

        return True

    def frontier(self) -> List[int]:
        """Unplaced numbers whose predecessor or successor is placed, ascending."""
        found = set()
        for number in self.placed:
            for k in (number - 1, number + 1):
                if 1 <= k <= self.n and self.pos[k] is None:
                    found.add(k)
        return sorted(found)

    def domain(self, number: int) -> List[Cell]:
        """Legal cells for a frontier number, ascending coordinate order."""
        if number > 1 and self.pos[number - 1] is not None:
            anchor = self.pos[number - 1]
        else:
            anchor = self.pos[number + 1]
        return sorted(c for c in self.grid.neighbors(anchor) if self.feasible(number, c))

    def cells_reachable(self) -> bool:
        """
        Every empty cell must lie inside some gap between placed numbers, and
        must keep enough open neighbours to be entered and left.
        """
        grid = self.grid
        placed = self.placed
        n = self.n

        gaps: List[Tuple[Optional[Cell], int, Optional[Cell], int]] = []
        if placed:
            if placed[0] > 1:
                gaps.append((None, 0, self.pos[placed[0]], placed[0]))
            for a, b in zip(placed, placed[1:]):
                if b - a > 1:
                    gaps.append((self.pos[a], a, self.pos[b], b))
            if placed[-1] < n:
                gaps.append((self.pos[placed[-1]], placed[-1], None, n + 1))

        need_two = self.pos[1] is not None and self.pos[n] is not None
        for cell in grid.cells:
            if cell in self.val:
                continue

            if gaps:
                inside = False
                for start, a, end, b in gaps:
                    span = b - a
                    used = 0
                    if start is not None:
                        used += grid.distance(start, cell)
                    if end is not None:
                        used += grid.distance(cell, end)
                    if start is None or end is None:
                        # open-ended gap: one side is free, need a number in range
                        if used <= span - 1:
                            inside = True
                            break
                    elif used <= span:
                        inside = True
                        break
                if not inside:
                    return False

            open_count = 0
            for nbr in grid.neighbors(cell):
                number = self.val.get(nbr)
                if number is None:
                    open_count += 1
                elif (number > 1 and self.pos[number - 1] is None) or \
                     (number < n and self.pos[number + 1] is None):
                    open_count += 1
            if open_count < (2 if need_two else 1):
                return False
        return True

    def propagate(self, stats: SolverStats, trace: Optional[List[Tuple[Cell, int]]] = None) -> bool:
        """
        Place forced moves until none is left.

        Returns:
            False on a contradiction, True otherwise
        """
        while True:
            if not self.cells_reachable():
                return False
            progressed = False
            for number in self.frontier():
                cells = self.domain(number)
                if not cells:
                    return False
                if len(cells) == 1:
                    self.place(number, cells[0])
                    stats.forced_moves += 1
                    if trace is not None:
                        trace.append((cells[0], number))
                    progressed = True
                    break
            if not progressed:
                return True

    def choose_branch(self) -> Tuple[int, List[Cell]]:
        """Number with the fewest legal cells (lowest number on ties) and its cells."""
        frontier = self.frontier()
        if not frontier:
            # Nothing placed yet: start the path anywhere
            return 1, [c for c in self.grid.cells if self.feasible(1, c)]
        best_number, best_cells = frontier[0], self.domain(frontier[0])
        for number in frontier[1:]:
            cells = self.domain(number)
            if len(cells) < len(best_cells):
                best_number, best_cells = number, cells
        return best_number, best_cells

    def to_path(self) -> Optional[Path]:
        """Path for a complete numbering, or None if a constraint is broken."""
        cells = [self.pos[k] for k in range(1, self.n + 1)]
        for a, b in zip(cells, cells[1:]):
            if b not in self.grid.neighbors(a):
                return None
        for cell, partners in self.partners.items():
            for p in partners:
                if abs(self.val[cell] - self.val[p]) != 1:
                    return None
        return Path(cells)


class Solver:
    """
    Decide zero / one / many completions of a partial numbering.

    Attributes:
        grid: Grid being solved
        config: Search budget
    """

    def __init__(self, grid: HexGrid, config: Optional[SolverConfig] = None):
        self.grid = grid
        self.config = config or SolverConfig()

    def solve(self, assignment: Mapping[Cell, int], links: Iterable[Sequence[Cell]] = ()) -> SolverResult:
        """
        Solve a partial numbering.

        Args:
            assignment: cell -> number (1..N), any subset of the grid
            links: Pairs of adjacent cells that must hold consecutive numbers

        Returns:
            SolverResult with status UNSOLVABLE, UNIQUE (with the Path) or MULTIPLE

        Raises:
            ValueError: Cell outside the grid, number out of range, malformed link
            SearchBudgetExceeded: More than config.max_nodes search nodes
        """
        stats = SolverStats()
        normalized = normalize_links(self.grid, links)
        try:
            state = _SearchState(self.grid, assignment, normalized)
        except _Inconsistent as exc:
            logger.debug(f"Inconsistent numbering: {exc}")
            return SolverResult(SolverStatus.UNSOLVABLE, stats=stats)

        solutions: List[Path] = []
        if state.propagate(stats):
            self._search(state, stats, solutions)

        if not solutions:
            status, solution = SolverStatus.UNSOLVABLE, None
        elif len(solutions) == 1:
            status, solution = SolverStatus.UNIQUE, solutions[0]
        else:
            status, solution = SolverStatus.MULTIPLE, None

        logger.debug(
            f"Solve: {status.value} forced={stats.forced_moves} branches={stats.branch_points} "
            f"depth={stats.max_depth} nodes={stats.nodes}"
        )
        return SolverResult(status, solution, stats)

    def _search(self, state: _SearchState, stats: SolverStats, solutions: List[Path]) -> None:
        """Depth-first search with an explicit stack; stops at the second solution."""
        if state.is_complete():
            path = state.to_path()
            if path is not None:
                solutions.append(path)
            return

        stack: List[list] = []
        self._open_frame(state, stats, stack)
        budget = self.config.max_nodes

        while stack:
            frame = stack[-1]
            number, cells, index, mark = frame
            state.undo_to(mark)
            if index >= len(cells):
                stack.pop()
                continue
            frame[2] = index + 1

            stats.nodes += 1
            if stats.nodes > budget:
                raise SearchBudgetExceeded(stats.nodes, budget)

            state.place(number, cells[index])
            if not state.propagate(stats):
                continue

            if state.is_complete():
                path = state.to_path()
                if path is not None:
                    solutions.append(path)
                    if len(solutions) >= 2:
                        return
                continue

            self._open_frame(state, stats, stack)

    @staticmethod
    def _open_frame(state: _SearchState, stats: SolverStats, stack: List[list]) -> None:
        number, cells = state.choose_branch()
        if len(cells) > 1:
            stats.branch_points += 1
        stack.append([number, cells, 0, len(state.trail)])
        stats.max_depth = max(stats.max_depth, len(stack))


def solve(grid: HexGrid, partial_assignment: Mapping[Cell, int],
          links: Iterable[Sequence[Cell]] = (), config: Optional[SolverConfig] = None) -> SolverResult:
    """Solve a partial numbering (see Solver.solve)."""
    return Solver(grid, config).solve(partial_assignment, links)


def forced_moves(grid: HexGrid, assignment: Mapping[Cell, int],
                 links: Iterable[Sequence[Cell]] = ()) -> List[Tuple[Cell, int]]:
    """
    Trace of the propagation phase: every (cell, number) placed by forced moves,
    in order. Empty when nothing is forced or the numbering is contradictory.
    """
    stats = SolverStats()
    try:
        state = _SearchState(grid, assignment, normalize_links(grid, links))
    except _Inconsistent:
        return []
    trace: List[Tuple[Cell, int]] = []
    if not state.propagate(stats, trace):
        return []
    return trace


def next_forced_move(grid: HexGrid, assignment: Mapping[Cell, int],
                     links: Iterable[Sequence[Cell]] = ()) -> Optional[Tuple[Cell, int]]:
    """First forced move from the current numbering, or None."""
    stats = SolverStats()
    try:
        state = _SearchState(grid, assignment, normalize_links(grid, links))
    except _Inconsistent:
        return None
    if not state.cells_reachable():
        return None
    for number in state.frontier():
        cells = state.domain(number)
        if not cells:
            return None
        if len(cells) == 1:
            return cells[0], number
    return None


def validate_completion(grid: HexGrid, assignment: Mapping[Cell, int],
                        links: Iterable[Sequence[Cell]] = ()) -> List[ValidationError]:
    """
    Check a full numbering.

    Returns:
        list[ValidationError]; empty list == a valid Hamiltonian numbering
    """
    errors: List[ValidationError] = []
    n = len(grid)
    by_number: Dict[int, Cell] = {}
    for cell, number in assignment.items():
        if cell not in grid:
            errors.append(ValidationError("error", "Cell is not in the grid", location=cell))
            continue
        if not 1 <= number <= n:
            errors.append(ValidationError("error", f"Value {number} out of range (1-{n})", location=cell))
            continue
        if number in by_number:
            errors.append(ValidationError("error", f"Duplicate value {number}", location=cell))
            continue
        by_number[number] = cell

    missing = [c for c in grid.cells if c not in assignment]
    if missing:
        errors.append(ValidationError("error", f"{len(missing)} cells are empty", location=missing[0]))

    for k in range(1, n):
        a, b = by_number.get(k), by_number.get(k + 1)
        if a is not None and b is not None and b not in grid.neighbors(a):
            errors.append(ValidationError(
                "error", f"Consecutive numbers {k} and {k + 1} are not adjacent", location=a
            ))

    for a, b in normalize_links(grid, links):
        va, vb = assignment.get(a), assignment.get(b)
        if va is not None and vb is not None and abs(va - vb) != 1:
            errors.append(ValidationError(
                "error", f"Linked cells hold {va} and {vb}, not consecutive numbers", location=a
            ))
    return errors
