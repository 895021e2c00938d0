"""
Mask Sequence Test Configuration - pytest配置文件

该文件提供测试的基础设施，包括：
- 通用的测试fixture（固定牌序、服务实例）
- 反作弊检查配置

所有测试都会自动加载这些配置。
"""

import random
import sys

import pytest

from mask_sequence.application import (
    ConfigService,
    MetaSessionService,
    RoundCommandService,
    RoundQueryService,
    RoundStartParams,
)
from mask_sequence.core.events import EventBus
from mask_sequence.core.tutorial import create_tutorial_round
from mask_sequence.tests.anti_cheat.core_usage_checker import CoreUsageChecker


@pytest.fixture
def rng():
    """固定种子的随机数生成器"""
    return random.Random(7)


@pytest.fixture
def tutorial_state():
    return create_tutorial_round()


@pytest.fixture
def event_bus():
    """每个测试使用独立的事件总线"""
    return EventBus()


@pytest.fixture
def config_service():
    return ConfigService()


@pytest.fixture
def command_service(event_bus, config_service):
    return RoundCommandService(event_bus=event_bus, config_service=config_service)


@pytest.fixture
def query_service(command_service):
    return RoundQueryService(command_service)


@pytest.fixture
def session_service(config_service):
    return MetaSessionService(config_service)


@pytest.fixture
def start_params():
    return RoundStartParams(tier_slots=4, tier_deck_size=15)


@pytest.fixture
def core_usage_checker():
    """核心使用检查器fixture"""
    return CoreUsageChecker()


@pytest.fixture(autouse=True)
def prevent_mock_usage(request):
    """标记为anti_cheat的测试中禁用mock模块"""
    if request.node.get_closest_marker("anti_cheat"):
        for module_name in ['unittest.mock', 'mock', 'pytest_mock']:
            if module_name in sys.modules:
                original_module = sys.modules.pop(module_name)

                def restore_module(name=module_name, module=original_module):
                    sys.modules[name] = module

                request.addfinalizer(restore_module)


def assert_real_object(obj, expected_type_name: str):
    """断言对象是真实的核心对象"""
    CoreUsageChecker.verify_real_objects(obj, expected_type_name)
