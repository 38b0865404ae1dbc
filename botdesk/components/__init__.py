"""
Reusable UI Components
"""

from .confirm_dialog import confirm
from .backend_offline import render_backend_offline
from .layout import page_frame, render_loading, load_section, NAV_ITEMS

__all__ = ['confirm', 'render_backend_offline', 'page_frame', 'render_loading', 'load_section', 'NAV_ITEMS']
