"""Browser-based dashboard for PageSim.

This package provides a Flask application that shows the RAM and swap
tables and lets you step the simulation from a browser.  It is an
**optional** extra — install with::

    pip install pagesim[web]

The ``create_app`` factory in ``app.py`` builds a simulation and serves
the JSON endpoints listed there.
"""
