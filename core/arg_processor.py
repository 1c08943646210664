"""
互動式參數收集

依照宣告順序處理每個參數：
    命令列已提供 → 驗證；有效就接受，無效則印錯誤並改為詢問
    命令列未提供 → 詢問使用者，驗證失敗就重新詢問
    condition 回傳 False → 整個參數跳過
    prompt 為 None → 私有參數，只接受命令列提供的值，從不詢問

全部處理完後把結果 dict 交給 handler。

用法：
    processors = ArgProcessorList()
    add_processor_for(processors, "appname", "Enter your application name:",
                      "Invalid value for application name: '$val'.", re.compile(r"^\\S+$"))
    process_args_interactive({"appname": "MyApp"}, processors, create_app)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from string import Template
from typing import Callable

from core.exceptions import ArgumentInputClosedError, InvalidArgumentError
from utils.console import log_error
from utils.logger import logger


@dataclass
class ArgProcessorOutput:
    """單一參數的處理結果；is_valid=False 時 value 為錯誤訊息"""
    is_valid: bool
    value: str


@dataclass
class ArgProcessor:
    name: str
    prompt: str | None
    processor: Callable[[str], ArgProcessorOutput]
    condition: Callable[[dict], bool] | None = None

    @property
    def is_private(self) -> bool:
        return self.prompt is None

    def applies_to(self, args_map: dict) -> bool:
        return self.condition is None or bool(self.condition(args_map))


class ArgProcessorList:
    """有序的 ArgProcessor 清單"""

    def __init__(self):
        self.processors: list[ArgProcessor] = []

    def add_arg_processor(
        self,
        name: str,
        prompt: str | None,
        processor: Callable[[str], ArgProcessorOutput],
        condition: Callable[[dict], bool] | None = None,
    ) -> "ArgProcessorList":
        self.processors.append(ArgProcessor(name, prompt, processor, condition))
        return self

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.processors]

    def __iter__(self):
        return iter(self.processors)

    def __len__(self) -> int:
        return len(self.processors)


def _is_valid(validation, val: str) -> bool:
    if validation is None:
        return True
    if isinstance(validation, re.Pattern):
        return validation.search(val) is not None
    if callable(validation):
        return bool(validation(val))
    raise TypeError(f"validation 必須是 callable、regex 或 None: {validation!r}")


def add_processor_for(
    processor_list: ArgProcessorList,
    name: str,
    prompt: str | None,
    error: str,
    validation=None,
    condition: Callable[[dict], bool] | None = None,
    preprocessor: Callable[[str], str] | None = None,
    postprocessor: Callable[[str], str] | None = None,
) -> ArgProcessorList:
    """
    加入一個參數處理器。

    Args:
        processor_list: 目標清單
        name: 參數名稱
        prompt: 詢問文字；None 表示私有參數
        error: 錯誤訊息，$val 會替換成使用者輸入的值
        validation: callable、已編譯的 regex（search 語意）或 None（不驗證）
        condition: 依目前已收集的值決定是否處理此參數
        preprocessor: 驗證前轉換輸入值（在去除前後空白之後）
        postprocessor: 驗證通過後轉換輸入值
    """
    def process(raw: str) -> ArgProcessorOutput:
        val = (raw or "").strip()
        if preprocessor is not None:
            val = preprocessor(val)
        if _is_valid(validation, val):
            return ArgProcessorOutput(
                True, postprocessor(val) if postprocessor is not None else val
            )
        return ArgProcessorOutput(False, Template(error).safe_substitute(val=val))

    return processor_list.add_arg_processor(name, prompt, process, condition)


def _prompt_until_valid(processor: ArgProcessor, ask: Callable[[str], str]) -> str:
    while True:
        try:
            answer = ask(f"{processor.prompt} ")
        except EOFError as e:
            raise ArgumentInputClosedError(processor.name) from e
        output = processor.processor(answer)
        if output.is_valid:
            return output.value
        log_error(output.value)


def collect_args(
    args_map: dict,
    processor_list: ArgProcessorList,
    ask: Callable[[str], str] = input,
) -> dict:
    """依序驗證 / 詢問所有參數，回傳最終的參數 dict（不修改傳入的 dict）"""
    result = dict(args_map)

    for processor in processor_list:
        if not processor.applies_to(result):
            logger.debug(f"略過參數 {processor.name}（條件不成立）")
            continue

        if processor.name in result:
            output = processor.processor(result[processor.name])
            if output.is_valid:
                result[processor.name] = output.value
                continue
            log_error(output.value)
            if processor.is_private:
                raise InvalidArgumentError(processor.name, output.value)
            del result[processor.name]
        elif processor.is_private:
            continue

        result[processor.name] = _prompt_until_valid(processor, ask)

    logger.debug(f"參數收集完成: {sorted(result)}")
    return result


def process_args_interactive(
    args_map: dict,
    processor_list: ArgProcessorList,
    handler: Callable[[dict], object],
    ask: Callable[[str], str] = input,
):
    """收集參數後呼叫 handler，回傳 handler 的結果"""
    return handler(collect_args(args_map, processor_list, ask))
