"""
core/arg_processor.py 單元測試

驗證互動式參數收集：命令列值驗證、詢問 / 重問、條件跳過、私有參數、
前後處理器與 handler 回傳值。
"""

import re

import pytest

from core.arg_processor import (
    ArgProcessorList,
    ArgProcessorOutput,
    add_processor_for,
    collect_args,
    process_args_interactive,
)
from core.exceptions import ArgumentInputClosedError, InvalidArgumentError

NON_EMPTY = re.compile(r"^\S+$")


def _processors(*specs):
    processors = ArgProcessorList()
    for spec in specs:
        add_processor_for(processors, **spec)
    return processors


@pytest.mark.unit
class TestAddProcessorFor:
    """add_processor_for 建立的處理器"""

    @pytest.mark.unit
    def test_regex_validation_accepts(self):
        """regex 驗證通過時回傳去除空白後的值"""
        processors = _processors(dict(name="appname", prompt="?", error="bad", validation=NON_EMPTY))
        output = processors.processors[0].processor("  MyApp  ")
        assert output == ArgProcessorOutput(True, "MyApp")

    @pytest.mark.unit
    def test_error_substitutes_val(self):
        """錯誤訊息中的 $val 換成輸入值"""
        processors = _processors(dict(
            name="appname", prompt="?",
            error="Invalid value for application name: '$val'.",
            validation=NON_EMPTY,
        ))
        output = processors.processors[0].processor("My App")
        assert output == ArgProcessorOutput(False, "Invalid value for application name: 'My App'.")

    @pytest.mark.unit
    def test_callable_validation(self):
        """validation 可為函式"""
        processors = _processors(dict(
            name="apptype", prompt="?", error="App type must be native.",
            validation=lambda v: v in ["native"],
        ))
        proc = processors.processors[0].processor
        assert proc("native").is_valid is True
        assert proc("hybrid").value == "App type must be native."

    @pytest.mark.unit
    def test_regex_uses_search_semantics(self):
        """regex 使用 search：有任一非空白字元即通過"""
        processors = _processors(dict(name="org", prompt="?", error="e", validation=re.compile(r"\S+")))
        assert processors.processors[0].processor("Acme, Inc.").is_valid is True

    @pytest.mark.unit
    def test_none_validation_accepts_anything(self):
        processors = _processors(dict(name="outputdir", prompt="?", error="e", validation=None))
        assert processors.processors[0].processor("").is_valid is True

    @pytest.mark.unit
    def test_pre_and_post_processor(self):
        """preprocessor 在驗證前、postprocessor 在驗證後套用"""
        processors = _processors(dict(
            name="packagename", prompt="?", error="e",
            validation=re.compile(r"^[a-z.]+$"),
            preprocessor=str.lower,
            postprocessor=lambda v: v + ".app",
        ))
        output = processors.processors[0].processor(" COM.ACME ")
        assert output == ArgProcessorOutput(True, "com.acme.app")

    @pytest.mark.unit
    def test_invalid_validation_type_raises(self):
        processors = _processors(dict(name="x", prompt="?", error="e", validation=42))
        with pytest.raises(TypeError):
            processors.processors[0].processor("v")

    @pytest.mark.unit
    def test_list_is_chainable(self):
        processors = ArgProcessorList()
        same = add_processor_for(processors, "a", "?", "e", None)
        assert same is processors
        assert processors.names == ["a"]
        assert len(processors) == 1


@pytest.mark.unit
class TestCollectArgs:
    """collect_args 狀態機"""

    @pytest.mark.unit
    def test_command_line_values_skip_prompt(self, answers):
        """命令列已提供且有效的值不再詢問"""
        processors = _processors(dict(name="appname", prompt="Name:", error="e", validation=NON_EMPTY))
        ask = answers()
        result = collect_args({"appname": " MyApp "}, processors, ask)
        assert result == {"appname": "MyApp"}
        assert ask.prompts == []

    @pytest.mark.unit
    def test_prompts_for_missing_values_in_order(self, answers):
        """缺少的參數依宣告順序詢問"""
        processors = _processors(
            dict(name="appname", prompt="Name:", error="e", validation=NON_EMPTY),
            dict(name="organization", prompt="Org:", error="e", validation=re.compile(r"\S+")),
        )
        ask = answers("MyApp", "Acme, Inc.")
        result = collect_args({}, processors, ask)
        assert result == {"appname": "MyApp", "organization": "Acme, Inc."}
        assert ask.prompts == ["Name: ", "Org: "]

    @pytest.mark.unit
    def test_reprompts_until_valid(self, answers, capsys):
        """驗證失敗時印出錯誤並重新詢問"""
        processors = _processors(dict(
            name="appname", prompt="Name:", error="Invalid: '$val'.", validation=NON_EMPTY,
        ))
        ask = answers("my app", "", "MyApp")
        result = collect_args({}, processors, ask)
        assert result == {"appname": "MyApp"}
        assert len(ask.prompts) == 3
        out = capsys.readouterr().out
        assert "Invalid: 'my app'." in out
        assert "Invalid: ''." in out

    @pytest.mark.unit
    def test_invalid_command_line_value_falls_back_to_prompt(self, answers, capsys):
        """命令列值無效時印錯誤後改為詢問"""
        processors = _processors(dict(
            name="packagename", prompt="Package:", error="'$val' is not a valid package name.",
            validation=re.compile(r"^[a-z]+(\.[a-z]+)*$"),
        ))
        ask = answers("com.acme")
        result = collect_args({"packagename": "Com.Acme"}, processors, ask)
        assert result == {"packagename": "com.acme"}
        assert "'Com.Acme' is not a valid package name." in capsys.readouterr().out

    @pytest.mark.unit
    def test_condition_false_skips_parameter(self, answers):
        """condition 不成立時不詢問"""
        processors = _processors(
            dict(name="apptype", prompt="Type:", error="e", validation=None),
            dict(name="startpage", prompt="Start:", error="e", validation=NON_EMPTY,
                 condition=lambda m: m.get("apptype") == "hybrid_remote"),
        )
        ask = answers()
        result = collect_args({"apptype": "native"}, processors, ask)
        assert result == {"apptype": "native"}
        assert ask.prompts == []

    @pytest.mark.unit
    def test_condition_sees_prompted_values(self, answers):
        """condition 看得到先前詢問得到的值"""
        processors = _processors(
            dict(name="apptype", prompt="Type:", error="e", validation=None),
            dict(name="startpage", prompt="Start:", error="e", validation=NON_EMPTY,
                 condition=lambda m: m.get("apptype") == "hybrid_remote"),
        )
        ask = answers("hybrid_remote", "/apex/Home")
        result = collect_args({}, processors, ask)
        assert result == {"apptype": "hybrid_remote", "startpage": "/apex/Home"}

    @pytest.mark.unit
    def test_private_parameter_never_prompted(self, answers):
        """prompt=None 的私有參數沒提供時直接略過"""
        processors = _processors(dict(name="templatepath", prompt=None, error="e", validation=None))
        ask = answers()
        assert collect_args({}, processors, ask) == {}
        assert ask.prompts == []

    @pytest.mark.unit
    def test_private_parameter_accepts_command_line(self):
        processors = _processors(dict(name="pluginrepourl", prompt=None, error="e", validation=None))
        assert collect_args({"pluginrepourl": "/tmp/plugin"}, processors) == {"pluginrepourl": "/tmp/plugin"}

    @pytest.mark.unit
    def test_invalid_private_parameter_raises(self):
        """私有參數無效時無法詢問，拋出 InvalidArgumentError"""
        processors = _processors(dict(name="secret", prompt=None, error="bad '$val'", validation=NON_EMPTY))
        with pytest.raises(InvalidArgumentError) as exc_info:
            collect_args({"secret": "a b"}, processors)
        assert exc_info.value.context["name"] == "secret"
        assert "bad 'a b'" in str(exc_info.value)

    @pytest.mark.unit
    def test_eof_raises_input_closed(self, answers):
        """輸入結束仍未取得有效值時拋出 ArgumentInputClosedError"""
        processors = _processors(dict(name="appname", prompt="Name:", error="e", validation=NON_EMPTY))
        with pytest.raises(ArgumentInputClosedError):
            collect_args({}, processors, answers("not valid"))

    @pytest.mark.unit
    def test_does_not_mutate_input(self, answers):
        args_map = {"appname": " MyApp "}
        processors = _processors(dict(name="appname", prompt="Name:", error="e", validation=NON_EMPTY))
        collect_args(args_map, processors, answers())
        assert args_map == {"appname": " MyApp "}

    @pytest.mark.unit
    def test_unknown_keys_are_kept(self, answers):
        """沒有處理器的 key 原樣保留"""
        processors = _processors(dict(name="appname", prompt="Name:", error="e", validation=NON_EMPTY))
        result = collect_args({"appname": "A", "extra": "x"}, processors, answers())
        assert result == {"appname": "A", "extra": "x"}


@pytest.mark.unit
class TestProcessArgsInteractive:
    """process_args_interactive 把結果交給 handler"""

    @pytest.mark.unit
    def test_handler_receives_final_map_and_result_returned(self, answers):
        processors = _processors(dict(name="appname", prompt="Name:", error="e", validation=NON_EMPTY))
        received = []

        def handler(args_map):
            received.append(args_map)
            return "done"

        result = process_args_interactive({}, processors, handler, answers("MyApp"))
        assert result == "done"
        assert received == [{"appname": "MyApp"}]
