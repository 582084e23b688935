from __future__ import annotations

from dataclasses import dataclass

from authoring_core.articles import ArticleService, CommentingSetting, commenting_from_article
from authoring_core.optimistic import OptimisticSetting


@dataclass(frozen=True)
class CommentingOption:
    value: CommentingSetting
    text: str


COMMENTING_OPTIONS = tuple(CommentingOption(setting, setting.label) for setting in CommentingSetting)


class CommentingChannel(OptimisticSetting[CommentingSetting]):
    """The commenting setting of one article, edited optimistically."""

    def __init__(
        self,
        articles: ArticleService,
        number: int,
        language: str,
        initial: CommentingSetting = CommentingSetting.ENABLED,
    ) -> None:
        super().__init__(
            initial,
            lambda setting: articles.change_commenting(number, language, setting),
            name=f"commenting of article {number}/{language}",
        )
        self.articles = articles
        self.number = number
        self.language = language

    async def load(self) -> CommentingSetting:
        """Seed both copies from the article's current flags on the server."""
        article = await self.articles.fetch(self.number, self.language)
        setting = commenting_from_article(article)
        self.reset(setting)
        return setting
