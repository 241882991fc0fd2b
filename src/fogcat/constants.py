"""Constants for fogcat."""

from __future__ import annotations

# Environment variable prefix for setting overrides (FOGCAT_SERVER, ...)
ENV_PREFIX = "FOGCAT_"

# Environment variable pointing at an alternative config file
CONFIG_ENV_VAR = "FOGCAT_CONFIG"

# Config directory and filename under the user's config home
CONFIG_DIRNAME = "fogcat"
CONFIG_FILENAME = "config.toml"

# FogBugz API endpoint, relative to the server address
API_PATH = "/api.asp"

# Resolution status "Fixed"
DEFAULT_RESOLVE_STATUS = 45

# Columns requested from the search endpoint when none are configured
DEFAULT_COLUMNS = (
    "ixBug,sStatus,ixStatus,sTitle,sEmailAssignedTo,sPersonAssignedTo,fOpen"
)

DEFAULT_TIMEOUT = 30.0

# Values of the fOpen case field
OPEN_TRUE = "true"
OPEN_FALSE = "false"

# Singular element names for list responses (listStatuses -> <status>)
LIST_SINGULARS = {
    "statuses": "status",
    "people": "person",
    "projects": "project",
    "categories": "category",
    "areas": "area",
    "priorities": "priority",
    "filters": "filter",
    "mailboxes": "mailbox",
}

# Table layout per list type: (heading, field) pairs
LIST_COLUMNS: dict[str, list[tuple[str, str]]] = {
    "statuses": [
        ("Status", "sStatus"),
        ("StatusID", "ixStatus"),
        ("CategoryID", "ixCategory"),
    ],
    "people": [
        ("Name", "sFullName"),
        ("Email", "sEmail"),
        ("PersonID", "ixPerson"),
    ],
    "projects": [
        ("Project", "sProject"),
        ("ProjectID", "ixProject"),
        ("Owner", "sPersonOwner"),
    ],
    "categories": [
        ("Category", "sCategory"),
        ("CategoryID", "ixCategory"),
        ("Plural", "sPlural"),
    ],
}

# Table layout for cases: (heading, field) pairs
CASE_COLUMNS: list[tuple[str, str]] = [
    ("BugID", "ixBug"),
    ("Status", "sStatus"),
    ("Title", "sTitle"),
    ("Assigned To", "sPersonAssignedTo"),
]
