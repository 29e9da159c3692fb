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

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TimeRange = Literal["day", "month", "year"]
SafeSearch = Literal["0", "1", "2"]


class SearxngResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    content: Optional[str] = ""
    url: str = ""
    score: Optional[float] = None


class SearxngResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: List[SearxngResult] = Field(default_factory=list)
