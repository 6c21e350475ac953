"""服务层：外部工具封装与命令处理"""
