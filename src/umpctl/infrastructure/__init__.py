"""Infrastructure layer: database, repositories, clock, workspace.

These are the concrete collaborators behind the email and counter
``perform`` functions. This layer depends on stdlib and third-party libs
(SQLAlchemy, anyio), the runtime outcome type, and domain value types.
Repositories return outcomes instead of raising on database errors.
"""
