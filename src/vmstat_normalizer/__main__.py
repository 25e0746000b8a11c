"""Module entrypoint.

Allows:
    python -m vmstat_normalizer
"""

from __future__ import annotations

from vmstat_normalizer.server.normalizer_server import main

if __name__ == "__main__":
    main()
