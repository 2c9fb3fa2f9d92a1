from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse

from auth.oauth import StravaOAuthService
from auth.dependencies import get_oauth_service


router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/strava/authorize")
async def authorize_strava(
    discord_id: str = Query(..., description="Discord user to link the Strava account to"),
    oauth_service: StravaOAuthService = Depends(get_oauth_service)
):
    """
    Redirect user to Strava authorization page.

    The Discord user ID travels through Strava as the OAuth state and comes
    back to /auth/strava/callback.
    """
    authorization_url = oauth_service.get_authorization_url(state=discord_id)
    return RedirectResponse(url=authorization_url)


@router.get("/strava/callback")
async def strava_callback(
    code: str = Query(..., description="Authorization code from Strava"),
    state: str = Query(..., description="Discord user ID passed to /strava/authorize"),
    scope: str | None = Query(None, description="Granted scopes"),
    oauth_service: StravaOAuthService = Depends(get_oauth_service)
):
    """
    Handle OAuth callback from Strava.

    Exchanges the authorization code for access and refresh tokens and links
    the athlete to the Discord user.
    """
    try:
        athlete, _ = await oauth_service.exchange_code_for_tokens(code, discord_id=state)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to exchange authorization code: {str(e)}"
        )

    return {
        "message": "Successfully authenticated with Strava",
        "athlete_id": athlete.athlete_id,
        "discord_id": athlete.discord_id
    }
