"""分发层（dispatch）。

解析 -> 拼命令 -> 执行：`resolve_install` 选出安装，`build_command` 拼出 RunUAT 命令串，
`run_command` 以继承控制台的方式执行并返回子进程退出码。
命令行入口由仓库根目录 `main.py` 统一承载。
"""
