"""行内编辑表格 - 路由蓝图."""
