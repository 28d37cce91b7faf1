"""Superficie de escritorio de NanoMol: editor, geometría de enlaces y widgets Qt."""
