#!/usr/bin/env python3
"""
Searching a small application object graph.

This example demonstrates:
- Searching by name, kind and value
- How cycles show up as aliases of an earlier path
- Debug mode returning the matches for further processing
"""

import re
import sys
from pathlib import Path
from types import SimpleNamespace

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

import spotlight


def build_app() -> SimpleNamespace:
    """Build a toy application with shared and cyclic references."""
    http = {'timeout': 30, 'retries': 0, 'pattern': re.compile(r'^/api/')}
    db = {'timeout': 5, 'url': 'sqlite://', 'pool': None}
    app = SimpleNamespace(name='demo', settings={'http': http, 'db': db})
    # the app knows itself through its plugins
    app.plugins = [SimpleNamespace(host=app, name='audit')]
    return app


def main():
    app = build_app()

    print("Properties named 'timeout':")
    spotlight.by_name('timeout', obj=app, path='app')

    print("\nCompiled regular expressions:")
    spotlight.by_kind(re.Pattern, obj=app, path='app')

    print("\nProperties that are exactly 0 (False and '0' do not count):")
    spotlight.by_value(0, obj=app, path='app')

    print("\nReferences back to the app itself:")
    spotlight.custom(lambda value, key, owner: value is app, obj=app, path='app')

    spotlight.set_debug(True)
    unset = spotlight.by_value(None, obj=app, path='app')
    print(f"\n{len(unset)} unset setting(s): {[match.path for match in unset]}")


if __name__ == "__main__":
    main()
