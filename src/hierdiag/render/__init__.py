"""Renderers turning analysis results into Graphviz and Coq text."""
