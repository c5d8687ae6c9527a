import typing


def english_enumerate(items: typing.Iterable[str], conj: str = "and") -> str:
    """
    Joins ``items`` the way an English sentence lists things::

        english_enumerate(["a", "b", "c"])  # => "a, b, and c"
    """
    items = list(items)
    if len(items) < 2:
        return "".join(items)
    if len(items) == 2:
        return f"{items[0]} {conj} {items[1]}"
    return f"{', '.join(items[:-1])}, {conj} {items[-1]}"
