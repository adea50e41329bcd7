"""
Credential records protected by the credential cipher.
"""
from pydantic import BaseModel, Field
from typing import Optional


class EncryptedCredentials(BaseModel):
    """Encrypted blob plus the salt needed to re-derive its key."""
    
    encrypted_data: str = Field(..., alias="encryptedData", description="hex(iv):hex(ciphertext):hex(tag)")
    salt: str = Field(..., description="Hex-encoded PBKDF2 salt")
    
    class Config:
        populate_by_name = True


class WorkTrackingCredentials(BaseModel):
    """Connection details for the external work-tracking system."""
    
    organization_url: str = Field(..., alias="organizationUrl", description="Organization base URL")
    personal_access_token: str = Field(..., alias="personalAccessToken", description="Personal access token")
    project: str = Field(..., description="Work-tracking project name")
    team_id: Optional[str] = Field(default=None, alias="teamId", description="Optional team identifier")
    
    class Config:
        populate_by_name = True
