"""Framework adapters keyed by CLI subcommand name.

Submodules:
- base: shared adapter interface and dependency install
- laravel: composer scaffold, .env database settings
- wordpress: WP-CLI download, config and install
"""

from .base import Framework
from .laravel import Laravel
from .wordpress import WordPress

FRAMEWORKS: dict[str, Framework] = {
    Laravel.name: Laravel(),
    WordPress.name: WordPress(),
}
