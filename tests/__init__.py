"""
测试包

运行方式：pytest（数据库使用内存SQLite，无需MySQL）
"""
