class Universe:
    """
    The base class for universe. Keeps track of the generated systems, which
    can be iterated over in generation order.
    """

    def __init__(self) -> None:
        pass

    def __repr__(self):
        str = f"{self.type} universe\n"
        str += f"{len(self.systems)} systems loaded"
        return str

    def __len__(self):
        return len(self.systems)

    def __iter__(self):
        return iter(self.systems)
