"""工作线程"""

from PySide6.QtCore import QThread, Signal


class WorkerThread(QThread):
    """工作线程

    在后台执行存储读写等耗时操作，结果（或异常对象）通过 finished 发出
    """
    finished = Signal(object)

    def __init__(self, func, *args, **kwargs):
        super().__init__()
        self.func = func
        self.args = args
        self.kwargs = kwargs

    def run(self):
        try:
            result = self.func(*self.args, **self.kwargs)
            self.finished.emit(result)
        except Exception as e:
            self.finished.emit(e)
