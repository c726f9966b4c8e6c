import numpy as np

from weighted_union_find import WeightedQuickUnionUF


class SquareLattice:
    """
    An n by n grid of sites addressed by 1-indexed (row, col), all
    blocked at construction. Subclasses decide how connectivity of the
    open sites is tracked.
    """

    def __init__(self, n: int):
        if n <= 0: raise ValueError("n must be a positive integer")

        self.gridSize = n
        self.gridSquare = n * n
        self.grid = np.zeros((n, n), dtype=bool)
        self.openSite = 0

    # is site[row, col] open?
    def isOpen(self, row: int, col: int) -> bool:
        self.validState(row, col)
        return bool(self.grid[row - 1, col - 1])

    def numberOfOpenSites(self) -> int:
        return self.openSite

    def validState(self, row: int, col: int):
        if not self.isOnGrid(row, col):
            raise IndexError(f"site ({row}, {col}) is outside the {self.gridSize}x{self.gridSize} grid")

    def flattenGrid(self, row: int, col: int) -> int:
        # row-major, 0-based
        return self.gridSize * (row - 1) + (col - 1)

    def isOnGrid(self, row: int, col: int) -> bool:
        return 1 <= row <= self.gridSize and 1 <= col <= self.gridSize

    def openNeighbours(self, row: int, col: int):
        """
        Yields the flat index of every open site orthogonally adjacent
        to (row, col).
        """
        for r, c in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
            if self.isOnGrid(r, c) and self.grid[r - 1, c - 1]:
                yield self.flattenGrid(r, c)

    def _mark_open(self, row: int, col: int) -> bool:
        # returns False when the site was already open
        self.validState(row, col)
        if self.grid[row - 1, col - 1]:
            return False
        self.grid[row - 1, col - 1] = True
        self.openSite += 1
        return True


class Percolation(SquareLattice):
    """
    Site percolation on an n by n grid backed by two union-find
    structures over the same n*n + 2 elements.

    Both receive every union between adjacent open sites and between
    open top-row sites and the virtual top. Only wqfGrid_TB also links
    open bottom-row sites to the virtual bottom, so percolates() asks
    wqfGrid_TB while isFull() asks wqfGrid_Full. Keeping the bottom
    terminal out of wqfGrid_Full stops open bottom-row sites from
    looking full through the bottom once the system percolates
    (backwash).
    """

    def __init__(self, n: int):
        super().__init__(n)

        self.wqfGrid_TB = WeightedQuickUnionUF(self.gridSquare + 2)
        self.wqfGrid_Full = WeightedQuickUnionUF(self.gridSquare + 2)

        self.virtualTop = self.gridSquare
        self.virtualBottom = self.gridSquare + 1

    # open the site[row, col] if it's not open yet
    def open_site(self, row: int, col: int):
        if not self._mark_open(row, col):
            return

        flatIndex = self.flattenGrid(row, col)

        ## top row
        if row == 1:
            self.wqfGrid_TB.union(flatIndex, self.virtualTop)
            self.wqfGrid_Full.union(flatIndex, self.virtualTop)

        ## bottom row, percolation structure only
        if row == self.gridSize:
            self.wqfGrid_TB.union(flatIndex, self.virtualBottom)

        ## up, down, left, right
        for neighbour in self.openNeighbours(row, col):
            self.wqfGrid_TB.union(flatIndex, neighbour)
            self.wqfGrid_Full.union(flatIndex, neighbour)

    # is site[row, col] connected to the top row through open sites?
    def isFull(self, row: int, col: int) -> bool:
        if not self.isOpen(row, col):
            return False
        return self.wqfGrid_Full.connected(self.flattenGrid(row, col), self.virtualTop)

    def percolates(self) -> bool:
        return self.wqfGrid_TB.connected(self.virtualTop, self.virtualBottom)


class FlaggedPercolation(SquareLattice):
    """
    Site percolation with a single union-find over the n*n sites and
    no virtual terminals. Each root carries two flags: its component
    touches the top row, its component touches the bottom row. Unions
    OR the flags into the surviving root.

    Answers the same queries as Percolation with half the union-find
    memory. Fullness reads only the top flag of a site's root, so it
    cannot pick up backwash.
    """

    def __init__(self, n: int):
        super().__init__(n)

        self.wqfGrid = WeightedQuickUnionUF(self.gridSquare)
        self.touchesTop = np.zeros(self.gridSquare, dtype=bool)
        self.touchesBottom = np.zeros(self.gridSquare, dtype=bool)
        self.percolated = False

    def open_site(self, row: int, col: int):
        if not self._mark_open(row, col):
            return

        flatIndex = self.flattenGrid(row, col)

        # a freshly opened site is still its own root
        if row == 1:
            self.touchesTop[flatIndex] = True
        if row == self.gridSize:
            self.touchesBottom[flatIndex] = True

        for neighbour in self.openNeighbours(row, col):
            self._merge(flatIndex, neighbour)

        root = self.wqfGrid.find(flatIndex)
        if self.touchesTop[root] and self.touchesBottom[root]:
            self.percolated = True

    def _merge(self, p: int, q: int):
        rootP = self.wqfGrid.find(p)
        rootQ = self.wqfGrid.find(q)
        if rootP == rootQ:
            return

        top = self.touchesTop[rootP] or self.touchesTop[rootQ]
        bottom = self.touchesBottom[rootP] or self.touchesBottom[rootQ]

        root = self.wqfGrid.union(rootP, rootQ)
        self.touchesTop[root] = top
        self.touchesBottom[root] = bottom

    def isFull(self, row: int, col: int) -> bool:
        if not self.isOpen(row, col):
            return False
        return bool(self.touchesTop[self.wqfGrid.find(self.flattenGrid(row, col))])

    def percolates(self) -> bool:
        return self.percolated
