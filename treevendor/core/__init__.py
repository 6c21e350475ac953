"""核心层：配置、异常与 vendor 算法"""
