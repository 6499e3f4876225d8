"""
Reusable UI Components
"""

from .node_modal import render_node_modal

__all__ = ['render_node_modal']
