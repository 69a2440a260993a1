class Interval:
    """
    a genomic span between two positions. The span covers ``end - start`` bases so that
    a point event (start == end) has no length

    Example:
        >>> Interval(1000, 2000).length()
        1000
    """

    def __init__(self, start, end=None):
        """
        Args:
            start (int): the start of the interval
            end (int): the end of the interval, defaults to the start for point events
        """
        self.start = int(start)
        self.end = int(end) if end is not None else self.start
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)

    def __getitem__(self, index):
        try:
            index = int(index)
        except ValueError:
            raise IndexError('index input accessor must be an integer', index)
        if index == 0:
            return self.start
        elif index == 1:
            return self.end
        raise IndexError('index input accessor is out of bounds: 1 or 2 only', index)

    def __len__(self):
        return self.length()

    def length(self):
        return self[1] - self[0]

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    def __eq__(self, other):
        if self[0] != other[0] or self[1] != other[1]:
            return False
        return True

    def __hash__(self):
        return hash((self[0], self[1]))

    @classmethod
    def overlap(cls, first, other):
        """
        the number of bases shared by two intervals

        Example:
            >>> Interval.overlap((1000, 2000), (1010, 1995))
            985
            >>> Interval.overlap((1, 4), (5, 7))
            0
        """
        return max(0, min(first[1], other[1]) - max(first[0], other[0]))

    @classmethod
    def proportion(cls, first, other):
        """
        the overlap of two intervals relative to the length of the larger of the two

        Returns:
            float: the proportion or None when either interval has no length

        Example:
            >>> Interval.proportion((1000, 2000), (1010, 1995))
            0.985
        """
        longest = max(first[1] - first[0], other[1] - other[0])
        if first[1] == first[0] or other[1] == other[0]:
            return None
        return cls.overlap(first, other) / longest

    @classmethod
    def dist(cls, first, other):
        """returns the minimum distance between intervals

        Example:
            >>> Interval.dist((1, 4), (5, 7))
            -1
            >>> Interval.dist((5, 7), (1, 4))
            1
            >>> Interval.dist((5, 8), (7, 9))
            0
        """
        if first[1] < other[0]:
            return first[1] - other[0]
        elif first[0] > other[1]:
            return first[0] - other[1]
        else:
            return 0
