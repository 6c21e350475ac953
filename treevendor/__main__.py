"""python -m treevendor 入口"""

from treevendor.cli import main

if __name__ == "__main__":
    main()
