# Copyright 2026 Firefly Software Solutions Inc.
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
"""Bundle provider adapters."""

from lingofly.i18n.adapters.bundle_chain import BundleChainProvider
from lingofly.i18n.adapters.in_memory import InMemoryBundleProvider
from lingofly.i18n.adapters.resource_bundle import DEFAULT_BASE_NAME, ResourceBundleProvider

__all__ = [
    "DEFAULT_BASE_NAME",
    "BundleChainProvider",
    "InMemoryBundleProvider",
    "ResourceBundleProvider",
]
