"""领域层模型。

包含：
- models: ChatTurn / RequestStatus / ChatConfig。
- conversation: 内存中的 ConversationStore。
- exceptions: 业务异常类型定义。
"""
