from __future__ import annotations

import pytest

from cloud_labs.services.iam_service import IamService, IamServiceError
from tests.fakes import FakeSession, client_error


async def test_get_role_arn(iam: IamService, session: FakeSession) -> None:
    session.respond("iam", "get_role", {"Role": {"Arn": "arn:aws:iam::123:role/R"}})

    assert await iam.get_role_arn("R") == "arn:aws:iam::123:role/R"
    assert session.params("iam", "get_role") == [{"RoleName": "R"}]


async def test_missing_role_has_actionable_message(iam: IamService, session: FakeSession) -> None:
    session.fail("iam", "get_role", client_error("NoSuchEntity"))

    with pytest.raises(IamServiceError, match="Make sure the role exists"):
        await iam.get_role_arn("APIGatewayS3ServiceRole")
