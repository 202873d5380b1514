"""
Role Capabilities Configuration
Defines which actions each account role (individual user or NGO) may perform.
Used by route dependencies to gate NGO-only workflows.
"""

# Resources and the actions exposed on them
MODULES = {
    "listings": {
        "resource": "listings",
        "actions": ["create", "read", "update", "delete"],
        "description": "Marketplace listings"
    },
    "swaps": {
        "resource": "swaps",
        "actions": ["create", "read", "update"],
        "description": "Barter swap offers"
    },
    "claims": {
        "resource": "claims",
        "actions": ["create", "read", "update", "delete"],
        "description": "NGO claims on gifted listings"
    },
    "drives": {
        "resource": "drives",
        "actions": ["create", "read", "update"],
        "description": "NGO donation drives"
    },
    "donations": {
        "resource": "donations",
        "actions": ["create", "read", "update"],
        "description": "Pledges against NGO drives"
    },
    "forums": {
        "resource": "forums",
        "actions": ["create", "read", "delete"],
        "description": "Community forums"
    },
}

# Actions each role is granted per resource
ROLE_TYPES = {
    "user": {
        "grants": {
            "listings": ["create", "read", "update", "delete"],
            "swaps": ["create", "read", "update"],
            "drives": ["read"],
            "donations": ["create", "read", "update"],
            "forums": ["create", "read", "delete"],
        },
        "description": "Individual community member who gifts, barters, sells and buys"
    },
    "ngo": {
        "grants": {
            "listings": ["create", "read", "update", "delete"],
            "swaps": ["read", "update"],
            "claims": ["create", "read", "update", "delete"],
            "drives": ["create", "read", "update"],
            "donations": ["read", "update"],
            "forums": ["create", "read", "delete"],
        },
        "description": "Organisation that claims gifted items and runs donation drives"
    },
}


def get_role_capabilities(role: str) -> list:
    """Return sorted "resource:action" capability names for a role; unknown roles get none."""
    role_config = ROLE_TYPES.get(role)
    if not role_config:
        return []
    capabilities = []
    for resource, actions in role_config["grants"].items():
        module_actions = MODULES.get(resource, {}).get("actions", [])
        for action in actions:
            if action in module_actions:
                capabilities.append(f"{resource}:{action}")
    return sorted(capabilities)


ROLE_CAPABILITIES = {role: get_role_capabilities(role) for role in ROLE_TYPES}
