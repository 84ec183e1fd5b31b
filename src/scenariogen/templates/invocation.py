"""
Optional resolver flags derived from scenario options.

Flags are appended to the shared base command in a fixed order that does not
depend on which options are present.
"""

from attrs import frozen

from scenariogen.scenarios.model import ResolverOptions


@frozen
class ResolverFlag:
    """Command-line arguments contributed by one resolver option."""

    option: str
    args: tuple[str, ...]


def resolver_flags(options: ResolverOptions) -> list[ResolverFlag]:
    """
    Derive the optional resolver arguments for a scenario.

    Order: prerelease, only-binary, no-binary, python-version. Absent options
    contribute nothing.

    Params:
        options: The scenario's resolver options

    Returns:
        Flags for every present option, in the fixed order
    """
    flags = []
    if options.prereleases is True:
        flags.append(ResolverFlag("prereleases", ("--prerelease=allow",)))
    if options.no_build is not None:
        flags.append(ResolverFlag("no_build", ("--only-binary", options.no_build)))
    if options.no_binary is not None:
        flags.append(ResolverFlag("no_binary", ("--no-binary", options.no_binary)))
    if options.python is not None:
        flags.append(ResolverFlag("python", (f"--python-version={options.python}",)))
    return flags
