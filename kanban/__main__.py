"""Allow running as: python -m kanban"""

from kanban.cli.main import main

if __name__ == "__main__":
    main()
