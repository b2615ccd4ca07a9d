# ConfigHelper Default Options
# Default host options as Python dict and YAML generator

from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "document": "~/.config/confighelper/app.config",
    "strict": True,
    "case_sensitive_paths": True,
    "output": {
        "verbose": False,
        "colored": True,
    },
}


def generate_default_config() -> str:
    """Generate default options as YAML string with comments."""
    header = """# confighelper - host options
#
# document:              XML configuration file holding appSettings,
#                        directories and driveMappings
# strict:                reject drive letters that are not "X:" after
#                        normalization and UNC paths without a leading \\\\
# case_sensitive_paths:  match directory entries by exact path

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
