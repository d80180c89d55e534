"""Allow ``python -m asset_embed``."""

import sys

from asset_embed.cli import main

sys.exit(main())
