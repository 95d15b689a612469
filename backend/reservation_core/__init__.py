"""
reservation_core - 与具体领域无关的框架层

- engine: 状态机引擎
"""
