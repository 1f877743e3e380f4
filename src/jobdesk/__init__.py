# jobdesk：对话助理（意图 + 筛选 + 回复）与简历 vs 职位匹配打分
__version__ = "0.1.0"
