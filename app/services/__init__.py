# app/services/__init__.py
"""
Service layer root package.

Each subpackage implements application use-cases on top of:

- SQLAlchemy models (app.models.*)
- Repositories (app.repositories.*)
- Pydantic schemas (app.schemas.*)
- Common service infrastructure (app.services.base.*)

Typical pattern for a service:

    class SomeService(BaseService[SomeModel, SomeRepository]):
        def some_use_case(self, actor, request) -> ServiceResult[SomeModel]:
            try:
                with self.transaction():
                    ...
            except RepositoryError as e:
                return self._handle_exception(e, "some use case")
            return ServiceResult.success(entity)
"""
