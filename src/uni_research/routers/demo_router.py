import logging
import os
import platform
import sys
import time
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request, status

from uni_research.config import configuration
from uni_research.data_models import (
    EchoData,
    ErrorKind,
    ResponseEnvelope,
    SlowOperationData,
    StatusData,
    SystemInfoData,
)
from uni_research.data_models.api_models import OsInfo, RuntimeInfo
from uni_research.utils.api_log import log_api_call
from uni_research.utils.exceptions import BusinessError
from uni_research.utils.executor import BoundedTaskExecutor

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)

# =============================================================================
#   Router
# =============================================================================
router = APIRouter(prefix="/demo", tags=["demo"])

SLOW_OPERATION_SECONDS: float = 2.0
MIN_AGE, MAX_AGE = 0, 150


# =============================================================================
#   Dependency
# =============================================================================
def get_task_executor(request: Request) -> BoundedTaskExecutor:
    """FastAPI dependency that resolves the task executor from app state.
    The executor is created by the lifespan hook in app.py."""
    return request.app.state.task_executor


# =============================================================================
#   Success envelope
# =============================================================================
@router.get(
    "/success",
    summary="Success response example.",
    description="Returns a success envelope with a small status payload.",
    response_model=ResponseEnvelope[StatusData],
    status_code=status.HTTP_200_OK,
)
@log_api_call
async def demo_success() -> ResponseEnvelope[StatusData]:
    logger.info("Success demo endpoint called.")
    return ResponseEnvelope[StatusData].success(
        StatusData(
            message=f"Hello, {configuration.app.project_name}!",
            timestamp=datetime.now(),
            version=configuration.app.version,
        )
    )


# =============================================================================
#   Echo
# =============================================================================
@router.get(
    "/echo",
    summary="Echo a query parameter.",
    description="Greets `name` and reports its length, with a custom success message.",
    response_model=ResponseEnvelope[EchoData],
    status_code=status.HTTP_200_OK,
)
@log_api_call
async def demo_echo(
    name: str = Query(default="World", description="Name to greet."),
) -> ResponseEnvelope[EchoData]:
    logger.info("Echo endpoint called with name='%s'.", name)
    data = EchoData(input=name, output=f"Hello, {name}!", length=len(name))
    return ResponseEnvelope[EchoData].success(data, message="处理成功")


# =============================================================================
#   Error examples
# =============================================================================
@router.get(
    "/error/biz",
    summary="Business error example.",
    description="Raises a BusinessError (USER_NOT_FOUND) handled by the global exception handler.",
    response_model=ResponseEnvelope[None],
)
@log_api_call
async def demo_business_error() -> ResponseEnvelope[None]:
    logger.warning("About to raise a business error.")
    raise BusinessError(ErrorKind.USER_NOT_FOUND, "这是一个模拟的业务异常")


@router.get(
    "/error/system",
    summary="System error example.",
    description=(
        "Raises an unexpected RuntimeError. The caller receives the generic "
        "internal-error message; the details only reach the logs."
    ),
    response_model=ResponseEnvelope[None],
)
@log_api_call
async def demo_system_error() -> ResponseEnvelope[None]:
    logger.warning("About to raise a system error.")
    raise RuntimeError("这是一个模拟的系统异常")


@router.get(
    "/error/param",
    summary="Parameter validation example.",
    description=(
        f"`age` is required and must lie in [{MIN_AGE}, {MAX_AGE}]. "
        "A missing or non-integer value is a validation error; an out-of-range "
        "value raises ValueError. Both map to code 400."
    ),
    response_model=ResponseEnvelope[None],
)
@log_api_call
async def demo_param_error(
    age: int = Query(description="Age to check."),
) -> ResponseEnvelope[None]:
    if age < MIN_AGE or age > MAX_AGE:
        raise ValueError(f"年龄参数不合法：{age}")
    return ResponseEnvelope[None].success()


# =============================================================================
#   Slow operation
# =============================================================================
def _simulate_slow_work(seconds: float) -> None:
    time.sleep(seconds)


@router.get(
    "/slow",
    summary="Slow operation example.",
    description=(
        "Runs a blocking sleep on the task executor; useful to watch the call log timing. "
        "When the executor backlog is full the sleep runs on the request worker thread."
    ),
    response_model=ResponseEnvelope[SlowOperationData],
)
@log_api_call
def demo_slow_operation(
    executor: BoundedTaskExecutor = Depends(get_task_executor),
) -> ResponseEnvelope[SlowOperationData]:
    logger.info("Starting slow operation (%.1f s).", SLOW_OPERATION_SECONDS)

    start = time.perf_counter()
    executor.submit(_simulate_slow_work, SLOW_OPERATION_SECONDS).result()
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    logger.info("Slow operation finished in %d ms.", elapsed_ms)
    return ResponseEnvelope[SlowOperationData].success(
        SlowOperationData(message="耗时操作完成", duration=f"{elapsed_ms}ms")
    )


# =============================================================================
#   System info
# =============================================================================
@router.get(
    "/info",
    summary="System information.",
    description="Returns project metadata plus interpreter and host facts.",
    response_model=ResponseEnvelope[SystemInfoData],
)
@log_api_call
async def demo_system_info() -> ResponseEnvelope[SystemInfoData]:
    info = SystemInfoData(
        projectName=configuration.app.project_name,
        version=configuration.app.version,
        author=configuration.app.author,
        runtime=RuntimeInfo(
            processors=os.cpu_count() or 1,
            pythonVersion=platform.python_version(),
            implementation=platform.python_implementation(),
            executable=sys.executable,
        ),
        os=OsInfo(
            name=platform.system(),
            release=platform.release(),
            machine=platform.machine(),
        ),
    )
    return ResponseEnvelope[SystemInfoData].success(info)
