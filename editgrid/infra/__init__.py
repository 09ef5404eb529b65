"""基础设施层: 与 Flask 请求生命周期相关的横切逻辑."""
