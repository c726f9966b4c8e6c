# weighted quick union-find
class WeightedQuickUnionUF:
    """
    Weighted Quick-Union-Find over the integers 0..n-1 with full
    path compression.

    Roots satisfy parent[x] == x and carry the size of their tree. A
    union links the smaller tree under the larger one; when both trees
    have the same size the root of the second argument survives.
    """

    def __init__(self, n: int):
        """
        Initializes a union-find structure with 'n' elements indexed
        0 through n-1, each in its own component.

        :param n: The number of elements (0 gives an empty universe).
        """
        if n < 0:
            raise ValueError("n must be >= 0")

        # self.parent[i] = parent of element i
        self.parent = list(range(n))

        # self.size[i] = number of elements in the tree rooted at i
        self.size = [1] * n

        # number of disjoint components
        self.count = n

    def __len__(self):
        return len(self.parent)

    def get_count(self) -> int:
        """
        Returns the number of disjoint components.
        """
        return self.count

    def _validate(self, p: int):
        n = len(self.parent)
        if p < 0 or p >= n:
            raise IndexError(f"index {p} is not between 0 and {n - 1}")

    def find(self, p: int) -> int:
        """
        Returns the root of the component containing 'p', pointing
        every element on the path directly at the root.
        """
        self._validate(p)
        parent = self.parent

        root = p
        while root != parent[root]:
            root = parent[root]

        while p != root:
            next_p = parent[p]
            parent[p] = root
            p = next_p

        return root

    def connected(self, p: int, q: int) -> bool:
        """
        Returns True if 'p' and 'q' are in the same component.
        """
        return self.find(p) == self.find(q)

    def union(self, p: int, q: int) -> int:
        """
        Merges the components containing 'p' and 'q' and returns the
        root of the merged component.
        """
        rootP = self.find(p)
        rootQ = self.find(q)

        if rootP == rootQ:
            return rootP

        # smaller tree goes under the larger one, ties go to q
        if self.size[rootP] <= self.size[rootQ]:
            self.parent[rootP] = rootQ
            self.size[rootQ] += self.size[rootP]
            root = rootQ
        else:
            self.parent[rootQ] = rootP
            self.size[rootP] += self.size[rootQ]
            root = rootP

        self.count -= 1
        return root
