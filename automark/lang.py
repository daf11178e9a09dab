import logging

logger = logging.getLogger(__name__)

COMPONENT = "assignsubmission_automark"

STRINGS = {
    COMPONENT: {
        "pluginname": "Automark",
        "numwords": "Automark: {$a}",
    },
}


def get_string(identifier, component=COMPONENT, a=None):
    """
    Look up a localized string, substituting ``{$a}`` with ``a``.

    Missing strings come back as ``[[identifier]]`` so a page still renders.
    """
    strings = STRINGS.get(component, {})
    if identifier not in strings:
        logger.warning("Missing string %s in %s", identifier, component)
        return f"[[{identifier}]]"
    string = strings[identifier]
    if a is not None:
        string = string.replace("{$a}", str(a))
    return string
