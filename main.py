#!/usr/bin/env python3
"""horst-decode — decode horst capture logs into typed frame records."""

from horstlog.cli import main

if __name__ == "__main__":
    main()
