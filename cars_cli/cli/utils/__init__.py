"""CLI utility functions"""

from .interactive import (
    TargetWizard,
    choose_cloud_url,
    choose_release,
    choose_target,
    confirm_or_cancel,
    is_interactive,
)
from .output import (
    console,
    print_info,
    print_success,
)

__all__ = [
    # Interactive utilities
    'TargetWizard',
    'choose_cloud_url',
    'choose_release',
    'choose_target',
    'confirm_or_cancel',
    'is_interactive',

    # Output utilities
    'console',
    'print_info',
    'print_success',
]
