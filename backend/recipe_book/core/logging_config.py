# recipe_book/core/logging_config.py
# 루트 로거 설정: 앱 생성 시 1회 호출

import logging

FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

def setup_logging(level: str = "INFO") -> None:
    """루트 로거에 콘솔 핸들러 부착. 이미 핸들러가 있으면(테스트/재호출) 건너뜀."""
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATEFMT))
    root.addHandler(handler)
