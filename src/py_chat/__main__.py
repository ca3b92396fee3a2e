# -*- coding: utf-8 -*-
# -----------------------------------------------------------------------------
# filename: __main__.py
# author: dunamismax
# version: 1.0.0
# date: 10-18-2026
# github: https://github.com/dunamismax
# description: Allows running the chat CLI with ``python -m py_chat``.
# -----------------------------------------------------------------------------
from py_chat.cli import main

if __name__ == "__main__":
    main()
