# Copyright Thales 2025
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SelectionRequest(BaseModel):
    """
    How to slice converted page content. Built per call, used once.
    Field names accept both snake_case and the camelCase wire names.
    """

    model_config = ConfigDict(populate_by_name=True)

    start_char: int = Field(default=0, alias="startChar", description="Starting character position (default: 0)")
    max_length: int = Field(default=0, alias="maxLength", description="Maximum number of characters to return (0 = no limit)")
    section: Optional[str] = Field(default=None, description="Extract content under a specific heading")
    paragraph_range: Optional[str] = Field(
        default=None,
        alias="paragraphRange",
        description="Paragraph range, e.g. '1-5', '3', '10-'",
    )
    read_headings: bool = Field(default=False, alias="readHeadings", description="Return only the list of headings")

    @field_validator("start_char", "max_length", mode="before")
    @classmethod
    def _none_as_zero(cls, value):
        return 0 if value is None else value


class UrlReadRequest(SelectionRequest):
    url: str = Field(default="", description="http or https URL to read")
