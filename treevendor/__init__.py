"""treevendor - 以 git subtree 方式递归 vendor Go 依赖"""

__version__ = "0.1.0"
