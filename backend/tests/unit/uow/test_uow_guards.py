import pytest

from account_service.models.user import User
from account_service.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from account_service.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, db):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()

    def test_allows_reads(self, db):
        UserFactory()
        with ROuow() as uow:
            assert uow.session.query(User).count() == 1

    def test_disallows_commit(self, db):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_mutation_does_not_persist(self, db):
        user_id = UserFactory(email="keep@example.com").id

        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.users.get(user_id).email = "mutated@example.com"
            uow.session.flush()

        with ROuow() as uow:
            assert uow.users.get(user_id).email == "keep@example.com"


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_success(self, db):
        with RWuow() as uow:
            uow.users.add(User(email="new@example.com", password_hash="x" * 40))

        with ROuow() as uow:
            assert uow.users.get_by_email("NEW@example.com") is not None

    def test_rolls_back_on_error(self, db):
        with pytest.raises(LookupError):
            with RWuow() as uow:
                uow.users.add(User(email="gone@example.com", password_hash="x" * 40))
                raise LookupError("boom")

        with ROuow() as uow:
            assert uow.users.get_by_email("gone@example.com") is None
