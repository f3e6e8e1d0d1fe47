"""
Permissions and Roles Configuration
This config defines the permission matrix for all modules and which of the
two user roles ("admin", "user") holds each permission.
Used by require_permission() and by /auth/me to report the caller's permissions.
"""

ROLE_ADMIN = "admin"
ROLE_USER = "user"

# Define modules and their actions
MODULES = {
    "schemas": {
        "resource": "schemas",
        "actions": ["create", "read"],
        "description": "Schema, table and field metadata"
    },
    "access_requests": {
        "resource": "access_requests",
        "actions": ["create", "read", "read_all", "review"],
        "description": "Access request workflow"
    },
    "access_policies": {
        "resource": "access_policies",
        "actions": ["create", "read", "read_all", "delete", "copy"],
        "description": "Standing access policies"
    },
    "notifications": {
        "resource": "notifications",
        "actions": ["read", "update"],
        "description": "User notifications"
    },
    "users": {
        "resource": "users",
        "actions": ["read", "manage"],
        "description": "User directory"
    },
    "sample_data": {
        "resource": "sample_data",
        "actions": ["create"],
        "description": "Sample data seeding"
    }
}

# Actions a regular user holds per module; admins hold every action
ROLE_TYPES = {
    "ADMIN": {
        "role": ROLE_ADMIN,
        "description": "Full administrative access to the module"
    },
    "USER": {
        "role": ROLE_USER,
        "description": "Self-service access to the module"
    }
}

USER_ACTIONS = {
    "schemas": ["read"],
    "access_requests": ["create", "read"],
    "access_policies": ["read"],
    "notifications": ["read", "update"],
}

# Additional descriptions for specific permissions
MODULE_SPECIFIC_PERMISSIONS = {
    "access_requests": {
        "read_all": "Read access requests of every user",
        "review": "Approve or reject access requests"
    },
    "access_policies": {
        "read_all": "Read access policies of every user",
        "copy": "Copy access policies from one user to another"
    },
    "users": {
        "manage": "Grant or revoke the admin role"
    },
    "sample_data": {
        "create": "Initialize sample schemas, users and policies"
    }
}


def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the permissions held per role
    Format: {
        "permissions": [
            {"name": "schemas:read", "resource": "schemas", "action": "read", "description": "..."},
            ...
        ],
        "roles": {
            "admin": ["access_policies:copy", ...],
            "user": ["access_requests:create", ...]
        }
    }
    """
    permissions = []
    roles = {role_config["role"]: [] for role_config in ROLE_TYPES.values()}

    for module_name, module_config in MODULES.items():
        resource = module_config["resource"]

        for action in module_config["actions"]:
            permission_name = f"{resource}:{action}"
            description = f"{action.capitalize()} {resource}"

            if module_name in MODULE_SPECIFIC_PERMISSIONS and action in MODULE_SPECIFIC_PERMISSIONS[module_name]:
                description = MODULE_SPECIFIC_PERMISSIONS[module_name][action]

            permissions.append({
                "name": permission_name,
                "resource": resource,
                "action": action,
                "description": description
            })

            roles[ROLE_ADMIN].append(permission_name)
            if action in USER_ACTIONS.get(module_name, []):
                roles[ROLE_USER].append(permission_name)

    return {
        "permissions": permissions,
        "roles": {role: sorted(names) for role, names in roles.items()}
    }


PERMISSION_MATRIX = get_permission_matrix()
ROLE_PERMISSIONS = PERMISSION_MATRIX["roles"]


def get_role_permissions(role: str):
    """Permission names held by a role; unknown roles hold nothing."""
    return ROLE_PERMISSIONS.get(role, [])
