"""
远程计划生成服务的客户端

远程端点包装了第三方语言模型。这里只负责请求、超时和返回报文的结构校验，
校验通过后才交给业务层；任何失败都以 PlanGenerationError 抛出，不做自动重试。
"""
import json
import logging
import re

import httpx
from pydantic import ValidationError

from config import PLAN_GENERATOR_TIMEOUT, PLAN_GENERATOR_URL, PLAN_REGENERATOR_URL
from errors import PlanGenerationError, PlanValidationError
from models import GeneratedPlan, HairProfile, PlanGenerationResponse

log = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?")


def parse_plan_response(payload) -> GeneratedPlan:
    """把远程返回的 JSON 校验为 GeneratedPlan"""
    if not isinstance(payload, dict):
        raise PlanValidationError("Plan response is not a JSON object")

    plan = payload.get("plan")
    # 有的部署把模型输出原样放在字符串里，可能带 ``` 围栏
    if isinstance(plan, str):
        try:
            payload = {**payload, "plan": json.loads(_FENCE.sub("", plan).strip())}
        except json.JSONDecodeError as e:
            raise PlanValidationError(f"Plan is not valid JSON: {e}") from e

    try:
        response = PlanGenerationResponse.model_validate(payload)
    except ValidationError as e:
        raise PlanValidationError(f"Plan response has unexpected shape: {e.error_count()} errors") from e

    if not response.success:
        raise PlanGenerationError(response.error or "Plan generator reported failure")
    if response.plan is None:
        raise PlanValidationError("Plan response has no plan")
    return response.plan


class PlanGeneratorClient:
    def __init__(self, generate_url: str = PLAN_GENERATOR_URL, regenerate_url: str = PLAN_REGENERATOR_URL,
                 timeout: float = PLAN_GENERATOR_TIMEOUT, transport: httpx.AsyncBaseTransport = None):
        self.generate_url = generate_url
        self.regenerate_url = regenerate_url
        self.timeout = timeout
        self._transport = transport

    async def generate(self, profile: HairProfile, user_id: str) -> GeneratedPlan:
        return await self._post(self.generate_url, {"profile": profile.generator_payload(user_id)})

    async def regenerate(self, user_id: str) -> GeneratedPlan:
        return await self._post(self.regenerate_url, {"uid": user_id})

    async def _post(self, url: str, body: dict) -> GeneratedPlan:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=body)
        except httpx.TimeoutException as e:
            log.error("Plan generator timed out after %.0fs: %s", self.timeout, url)
            raise PlanGenerationError("Plan generator timed out") from e
        except httpx.HTTPError as e:
            log.error("Plan generator request failed: %s", e)
            raise PlanGenerationError(f"Plan generator unreachable: {e.__class__.__name__}") from e

        if response.status_code >= 300:
            try:
                detail = response.json().get("error")
            except (ValueError, AttributeError):
                detail = None
            log.error("Plan generator returned %s: %s", response.status_code, detail or response.text[:200])
            raise PlanGenerationError(detail or f"Plan generator returned {response.status_code}",
                                      status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise PlanValidationError("Plan generator returned malformed JSON") from e

        return parse_plan_response(payload)
