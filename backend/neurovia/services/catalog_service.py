from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..errors import NotFoundError
from ..models import Component, QuizQuestion
from ..schemas.catalog import ComponentCreate, ComponentUpdate, QuestionCreate, QuestionUpdate


class CatalogService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def active_questions(self, limit: int) -> Sequence[QuizQuestion]:
        # Quiz delivery, answer checks and scoring all rely on this exact order.
        statement = (
            select(QuizQuestion)
            .where(QuizQuestion.is_active.is_(True))
            .order_by(QuizQuestion.sort_order, QuizQuestion.created_at, QuizQuestion.id)
            .limit(limit)
        )
        return (await self.session.execute(statement)).scalars().all()

    async def available_components(self) -> Sequence[Component]:
        statement = (
            select(Component)
            .where(Component.is_available.is_(True))
            .order_by(Component.type, Component.price, Component.name)
        )
        return (await self.session.execute(statement)).scalars().all()

    async def resolve_components(self, component_ids: Sequence[str]) -> Sequence[Component]:
        unique_ids = list(dict.fromkeys(component_ids))
        if not unique_ids:
            return []
        statement = (
            select(Component)
            .where(Component.id.in_(unique_ids))
            .where(Component.is_available.is_(True))
        )
        return (await self.session.execute(statement)).scalars().all()

    # Admin maintenance

    async def list_components(self) -> Sequence[Component]:
        statement = select(Component).order_by(Component.created_at)
        return (await self.session.execute(statement)).scalars().all()

    async def get_component(self, component_id: str) -> Component:
        component = await self.session.get(Component, component_id)
        if not component:
            raise NotFoundError("Component not found", component_id=component_id)
        return component

    async def create_component(self, payload: ComponentCreate) -> Component:
        component = Component(**payload.model_dump())
        self.session.add(component)
        await self.session.commit()
        await self.session.refresh(component)
        return component

    async def update_component(self, component_id: str, payload: ComponentUpdate) -> Component:
        component = await self.get_component(component_id)
        for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(component, key, value)
        self.session.add(component)
        await self.session.commit()
        await self.session.refresh(component)
        return component

    async def delete_component(self, component_id: str) -> None:
        component = await self.get_component(component_id)
        await self.session.delete(component)
        await self.session.commit()

    async def list_questions(self) -> Sequence[QuizQuestion]:
        statement = select(QuizQuestion).order_by(QuizQuestion.sort_order, QuizQuestion.created_at)
        return (await self.session.execute(statement)).scalars().all()

    async def get_question(self, question_id: str) -> QuizQuestion:
        question = await self.session.get(QuizQuestion, question_id)
        if not question:
            raise NotFoundError("Question not found", question_id=question_id)
        return question

    async def create_question(self, payload: QuestionCreate) -> QuizQuestion:
        question = QuizQuestion(**payload.model_dump())
        self.session.add(question)
        await self.session.commit()
        await self.session.refresh(question)
        return question

    async def update_question(self, question_id: str, payload: QuestionUpdate) -> QuizQuestion:
        question = await self.get_question(question_id)
        for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(question, key, value)
        self.session.add(question)
        await self.session.commit()
        await self.session.refresh(question)
        return question

    async def delete_question(self, question_id: str) -> None:
        question = await self.get_question(question_id)
        await self.session.delete(question)
        await self.session.commit()
