"""Desktop GUI layer.

Keeps imports side-effect free: no QApplication is created and PyQt6 is only
imported by the widget modules themselves, so the headless chart packages
(``gui.charting``, ``gui.app.config_store``, ``gui.services``) stay usable
without a display.
"""

from __future__ import annotations
