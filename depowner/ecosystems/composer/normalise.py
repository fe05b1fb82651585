"""Name normalisation for Composer packages."""


def normalise_name(name: str) -> str:
    """Normalise a package name to a canonical form.

    Composer package names are case-insensitive ``vendor/package`` pairs and
    are lowercase by convention.
    """

    return name.strip().lower()
