"""Hook manifest models - githooks.json 数据模型"""

from pydantic import RootModel


class HookManifest(RootModel[dict[str, dict[str, list[str]]]]):
    """
    githooks.json 结构：

        {
            "<trigger>": {
                "<repositoryName>": ["<hookName>", ...]
            }
        }

    键顺序即执行顺序。
    """

    def repositories(self, trigger: str) -> dict[str, list[str]]:
        """返回 trigger 对应的 仓库 → hook 列表（精确匹配，不含 semi scope）"""
        return self.root.get(trigger, {})

    def triggers(self) -> list[str]:
        return list(self.root)


__all__ = ["HookManifest"]
