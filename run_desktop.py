#!/usr/bin/env python
"""Desktop app entrypoint for FinanzaSimple."""

import flet as ft

from finanzasimple.desktop.app import main

if __name__ == "__main__":
    ft.app(target=main)
