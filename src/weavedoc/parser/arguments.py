"""Function argument list parsing."""

from weavedoc.models import Argument


def parse_arguments(text: str) -> list[Argument]:
    """Parse the text between a function's parentheses.

    Every comma separates two arguments; DataWeave argument lists are flat so
    nesting is not tracked. The first colon of an argument separates its name
    from its type.

    Examples:
        >>> parse_arguments("a, b: Number")
        [Argument(name='a', datatype=None), Argument(name='b', datatype='Number')]
        >>> parse_arguments("  ")
        []
    """
    arguments = []
    if not text.strip():
        return arguments

    for part in text.split(","):
        name, sep, datatype = part.partition(":")
        name = name.strip()
        if not name:
            # "a, , b" has no second argument
            continue
        arguments.append(Argument(name=name, datatype=datatype.strip() if sep else None))
    return arguments
