"""
异常分类：对应对话与匹配链路中的各个失败点。

除 GenerationFailure 外，其余失败都在各自步骤内吸收并降级（意图→GENERAL、筛选→空、打分→关键词回退），
仅用于日志与测试断言；GenerationFailure 会冒泡到 Orchestrator.chat，由其返回固定致歉文案。
"""


class JobdeskError(Exception):
    """jobdesk 所有自定义异常的基类。"""


class CompletionError(JobdeskError):
    """completion 服务调用失败（网络、鉴权、厂商报错等）。"""


class CompletionTimeout(CompletionError):
    """completion 调用超时。"""


class ClassificationFailure(JobdeskError):
    """意图分类失败：调用出错或输出不在意图枚举内。"""


class ExtractionFailure(JobdeskError):
    """筛选条件提取失败：调用出错、无 JSON 或 JSON 不合法。"""


class ScoringFailure(JobdeskError):
    """职位打分失败：调用出错、JSON 不合法或 score 非数值。"""


class GenerationFailure(JobdeskError):
    """最终回复生成失败；唯一会传到 chat 顶层的失败。"""
