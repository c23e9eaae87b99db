"""
日志系统单元测试
遵循项目测试规范：快速执行，无外部依赖

测试 UnifiedLogger 的核心功能：模板格式化、结构化附加字段和保留字段改名
"""

import logging

import pytest
from unittest.mock import patch

from cloud_storage.core.log_messages import LogMessages, log_messages
from cloud_storage.core.log_utils import UnifiedLogger, get_logger, setup_logging


@pytest.mark.unit
@pytest.mark.logging
class TestUnifiedLogger:
    """UnifiedLogger 单元测试类"""

    def setup_method(self):
        """每个测试方法执行前的设置"""
        self.logger_name = "test_logger"
        self.unified_logger = UnifiedLogger(self.logger_name)

    def test_init(self):
        assert self.unified_logger.name == self.logger_name
        assert isinstance(self.unified_logger.logger, logging.Logger)

    def test_info_with_simple_message(self):
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info(log_messages.FILE_UPLOAD_SUCCESS)

            mock_info.assert_called_once()
            call_args = mock_info.call_args
            assert call_args[0][0] == "文件上传成功"
            assert call_args[1]['extra']['log_module'] == self.logger_name

    def test_info_with_format_parameters(self):
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info(log_messages.BACKEND_CREATED, provider="AWS S3")

            call_args = mock_info.call_args
            assert call_args[0][0] == "存储适配器创建成功: AWS S3"
            assert call_args[1]['extra']['provider'] == "AWS S3"

    def test_info_with_invalid_format(self):
        """格式化参数不匹配时使用原始消息"""
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info(log_messages.BACKEND_CREATED, wrong_param="x")

            assert mock_info.call_args[0][0] == log_messages.BACKEND_CREATED

    def test_message_with_braces_not_formatted_without_kwargs(self):
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            message = f"上传结果: {{'key': 'uploads/a.png'}}"
            self.unified_logger.info(message, extra={'key': 'uploads/a.png'})

            assert mock_info.call_args[0][0] == message

    def test_extra_fields_merged(self):
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info("文件删除成功", extra={'provider': 'Qiniu', 'key': 'uploads/a.png'})

            extra = mock_info.call_args[1]['extra']
            assert extra['provider'] == 'Qiniu'
            assert extra['key'] == 'uploads/a.png'

    def test_reserved_record_keys_are_renamed(self):
        """extra 中与 LogRecord 属性同名的键会被加上 ctx_ 前缀"""
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info("存储后端已就绪", extra={'name': 'AWS S3', 'filename': 'a.png'})

            extra = mock_info.call_args[1]['extra']
            assert 'name' not in extra
            assert extra['ctx_name'] == 'AWS S3'
            assert extra['ctx_filename'] == 'a.png'

    def test_reserved_keys_do_not_break_real_logging(self, caplog):
        logger = UnifiedLogger("test_real_logger")
        with caplog.at_level(logging.INFO, logger="test_real_logger"):
            logger.info("开始文件上传", extra={'filename': 'a.png', 'message': 'x'})

        assert "开始文件上传" in caplog.text

    def test_error_with_exception(self):
        with patch.object(self.unified_logger.logger, 'error') as mock_error:
            test_exception = ValueError("测试异常")

            self.unified_logger.error(log_messages.FILE_UPLOAD_FAILED, exception=test_exception)

            call_args = mock_error.call_args
            assert call_args[0][0] == "文件上传失败"
            assert call_args[1]['extra']['exception_type'] == 'ValueError'
            assert call_args[1]['extra']['exception_message'] == '测试异常'
            assert call_args[1]['exc_info'] == test_exception

    def test_error_without_exception(self):
        with patch.object(self.unified_logger.logger, 'error') as mock_error:
            self.unified_logger.error("错误消息")

            assert 'exc_info' not in mock_error.call_args[1]

    def test_warning(self):
        with patch.object(self.unified_logger.logger, 'warning') as mock_warning:
            self.unified_logger.warning("未知的七牛存储区域，使用默认区域", extra={'zone': 'moon'})

            mock_warning.assert_called_once()
            assert mock_warning.call_args[1]['extra']['zone'] == 'moon'

    @patch('cloud_storage.core.log_utils.settings')
    def test_debug_when_debug_enabled(self, mock_settings):
        mock_settings.app_debug = True

        with patch.object(self.unified_logger.logger, 'debug') as mock_debug:
            self.unified_logger.debug("调试消息")

            mock_debug.assert_called_once()

    @patch('cloud_storage.core.log_utils.settings')
    def test_debug_when_debug_disabled(self, mock_settings):
        mock_settings.app_debug = False

        with patch.object(self.unified_logger.logger, 'debug') as mock_debug:
            self.unified_logger.debug("调试消息")

            mock_debug.assert_not_called()

    def test_critical(self):
        with patch.object(self.unified_logger.logger, 'critical') as mock_critical:
            self.unified_logger.critical("严重错误")

            assert mock_critical.call_args[0][0] == "严重错误"


@pytest.mark.unit
@pytest.mark.logging
class TestGetLogger:
    """测试 get_logger 工厂函数"""

    def test_get_logger_returns_unified_logger(self):
        logger = get_logger("test_module")

        assert isinstance(logger, UnifiedLogger)
        assert logger.name == "test_module"

    def test_get_logger_caching(self):
        assert get_logger("test_module") is get_logger("test_module")

    def test_get_logger_different_names(self):
        assert get_logger("module1") is not get_logger("module2")


@pytest.mark.unit
@pytest.mark.logging
class TestSetupLogging:
    """测试日志系统配置"""

    def test_console_only(self):
        root_logger = logging.getLogger()
        saved_handlers = root_logger.handlers[:]
        saved_level = root_logger.level
        try:
            setup_logging(log_to_file=False)

            assert len(root_logger.handlers) == 1
            assert isinstance(root_logger.handlers[0], logging.StreamHandler)
            assert logging.getLogger("botocore").level == logging.WARNING
        finally:
            root_logger.handlers = saved_handlers
            root_logger.setLevel(saved_level)


@pytest.mark.unit
@pytest.mark.logging
class TestLogMessages:
    """测试 LogMessages 类"""

    def test_format_message(self):
        result = LogMessages.format_message(LogMessages.BACKEND_REGISTERED, backend_type="qiniu")
        assert result == "已注册存储适配器: qiniu"

    def test_get_structured_data(self):
        assert LogMessages.get_structured_data(provider="OSS", count=5) == {"provider": "OSS", "count": 5}
