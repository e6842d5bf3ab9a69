# Sticky-note Kanban board: card model, board state machine, drag engine, persistence
#
# Components:
#   errors.py     - Exception taxonomy (validation, contract, storage, format)
#   schema.py     - Data model (Card, Status, Position, ColumnGeometry)
#   board.py      - Column/Board aggregate, change signals and dirty flag
#   drag.py       - Drag gesture state machine and column hit-testing
#   commands.py   - Create/edit/delete handlers and the BoardController
#   store.py      - JSON file persistence with atomic replace
#   config.py     - YAML configuration loader
#   render.py     - Fixed-width text renderer (renderer contract)
#   cli.py        - Command-line front end

__version__ = "1.0.0"
