import logging
import datetime
import shutil
import os
import sys


class Log:
    _LOGGER_NAME = "topology"

    def __init__(self, log_dir="Log", echo=True):
        # 프로그램 실행 폴더
        if getattr(sys, 'frozen', False):
            program_dir = os.path.dirname(os.path.abspath(sys.executable))
        else:
            program_dir = os.path.dirname(os.path.abspath(__file__))

        # 절대 경로가 주어지면 os.path.join 이 그대로 사용
        self.log_dir = os.path.join(program_dir, log_dir)
        os.makedirs(self.log_dir, exist_ok=True)

        self.echo = echo

        # 로그 파일 경로 설정 (파일명은 'Log_YYYYMMDD.log' 형식)
        self.log_file = os.path.join(self.log_dir, f'Log_{self._current_date_str()}.log')
        # 로그 파일 복사 대상 경로 설정 (파일명은 'YYYYMMDD_작업로그.log' 형식)
        self.target_path = os.path.join(self.log_dir, f'{self._current_date_str()}_작업로그.log')

        self._logger = logging.getLogger(self._LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._attach_file_handler()

    def _attach_file_handler(self):
        """같은 로그 파일에 대한 핸들러가 중복 등록되지 않도록 한 번만 추가합니다."""
        target = os.path.abspath(self.log_file)
        for handler in self._logger.handlers:
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
                return

        handler = logging.FileHandler(target, encoding='utf-8')
        handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s', datefmt='%Y/%m/%d %H:%M'))
        self._logger.addHandler(handler)

    def _current_date_str(self):
        # 현재 날짜를 'YYYYMMDD' 형식으로 반환하는 메서드
        return datetime.datetime.now().strftime("%Y%m%d")

    def log(self, msg, level='DEBUG', create_log=False):
        """지정된 로그 레벨로 메시지를 기록하고, 필요시 로그 파일을 복사합니다."""
        level = level.upper()
        if level == "ERROR":
            self._logger.error(msg)
        elif level == "INFO":
            self._logger.info(msg)
        elif level == "WARNING":
            self._logger.warning(msg)
        elif level == "DEBUG":
            self._logger.debug(msg)
        else:
            print(f"알 수 없는 로그 레벨: {level}")
            return

        if self.echo:
            print(f"{level}: {msg}")

        if create_log:
            self._copy_log()

    def _copy_log(self):
        """로그 파일을 작업 로그 경로로 복사하는 메서드."""
        try:
            shutil.copy(self.log_file, self.target_path)
        except OSError as e:
            print(f"로그 파일 복사 실패: {e}")

    def get_log_paths(self):
        """현재 로그 파일 경로를 반환하는 메서드."""
        return self.log_file
