# /*******************************************************************************
# * Copyright (c) 14.03.2013 Aaron Digulla.
# * All rights reserved. This program and the accompanying materials
# * are made available under the terms of the Eclipse Public License v1.0
# * which accompanies this distribution, and is available at
# * http://www.eclipse.org/legal/epl-v10.html
# *
# * Contributors:
# *    Aaron Digulla - initial API and implementation and/or initial documentation
# *******************************************************************************/
'''
Filters which select the artifacts that go into the target definition.

They work like the filters of the maven-dependency-plugin. All filters
keep the order of the artifacts.

Created on Mar 14, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

import logging

from pdetarget.common import ConfigurationError

log = logging.getLogger('pdetarget.filters')

P2_GROUP_PREFIX = 'p2.'

class ArtifactFilter(object):
    '''Base class for filters'''
    def isIncluded(self, artifact):
        return True

    def filter(self, artifacts):
        result = []
        for artifact in artifacts:
            if self.isIncluded(artifact):
                result.append(artifact)
            else:
                log.debug('%r excludes %s' % (self, artifact.key()))
        return result

def isP2Artifact(groupId):
    '''Artifacts which Tycho creates from P2 repositories use group IDs starting with "p2."'''
    return groupId.startswith(P2_GROUP_PREFIX)

class P2Filter(ArtifactFilter):
    '''Exclude P2 artifact dependencies (eclipse-plugin, eclipse-feature, ...)'''
    def __init__(self, excludeP2=True):
        self.excludeP2 = excludeP2

    def isIncluded(self, artifact):
        return not (self.excludeP2 and isP2Artifact(artifact.groupId))

    def __repr__(self):
        return 'P2Filter(%s)' % self.excludeP2

# Which scopes a scope includes
INCLUDED_SCOPES = {
    'test': ('compile', 'provided', 'runtime', 'test', 'system'),
    'compile': ('compile', 'provided', 'system'),
    'runtime': ('compile', 'runtime'),
    'provided': ('provided',),
    'system': ('system',),
}

class ScopeFilter(ArtifactFilter):
    '''Select artifacts by scope.

    includeScope=runtime keeps compile and runtime dependencies;
    excludeScope=runtime removes them.'''
    def __init__(self, includeScope=None, excludeScope=None):
        for scope in (includeScope, excludeScope):
            if scope and scope not in INCLUDED_SCOPES:
                raise ConfigurationError('Invalid scope %s; expected one of %s' % (scope, ', '.join(sorted(INCLUDED_SCOPES))))

        if excludeScope == 'test':
            raise ConfigurationError("Can't exclude scope test because that would exclude everything")

        self.includeScope = includeScope
        self.excludeScope = excludeScope

    def isIncluded(self, artifact):
        scope = artifact.scope or 'compile'

        if self.includeScope and scope not in INCLUDED_SCOPES[self.includeScope]:
            return False

        if self.excludeScope and scope in INCLUDED_SCOPES[self.excludeScope]:
            return False

        return True

    def __repr__(self):
        return 'ScopeFilter(include=%s, exclude=%s)' % (self.includeScope, self.excludeScope)

class PropertyFilter(ArtifactFilter):
    '''Include or exclude artifacts by comparing one of their properties with a list of values'''
    def __init__(self, field, includes=None, excludes=None):
        self.field = field
        self.includes = list(includes or [])
        self.excludes = list(excludes or [])

    def matches(self, value, pattern):
        return value == pattern

    def matchesAny(self, value, patterns):
        for pattern in patterns:
            if self.matches(value, pattern):
                return True
        return False

    def isIncluded(self, artifact):
        value = getattr(artifact, self.field) or ''

        if self.includes and not self.matchesAny(value, self.includes):
            return False

        if self.excludes and self.matchesAny(value, self.excludes):
            return False

        return True

    def __repr__(self):
        return '%s(include=%s, exclude=%s)' % (self.__class__.__name__, self.includes, self.excludes)

class TypeFilter(PropertyFilter):
    def __init__(self, includes=None, excludes=None):
        PropertyFilter.__init__(self, 'type', includes, excludes)

class ClassifierFilter(PropertyFilter):
    def __init__(self, includes=None, excludes=None):
        PropertyFilter.__init__(self, 'classifier', includes, excludes)

class ArtifactIdFilter(PropertyFilter):
    def __init__(self, includes=None, excludes=None):
        PropertyFilter.__init__(self, 'artifactId', includes, excludes)

class GroupIdFilter(PropertyFilter):
    '''Group IDs match by prefix, so "org.apache" matches "org.apache.commons"'''
    def __init__(self, includes=None, excludes=None):
        PropertyFilter.__init__(self, 'groupId', includes, excludes)

    def matches(self, value, pattern):
        return value.startswith(pattern)

class FilterChain(ArtifactFilter):
    '''Apply several filters in sequence'''
    def __init__(self, filters=None):
        self.filters = list(filters or [])

    def add(self, filter):
        self.filters.append(filter)
        return self

    def filter(self, artifacts):
        for filter in self.filters:
            artifacts = filter.filter(artifacts)
        return artifacts

    def __repr__(self):
        return 'FilterChain(%s)' % ', '.join(repr(f) for f in self.filters)

def splitList(value):
    '''Split a comma-separated option value'''
    if not value:
        return []
    if not isinstance(value, str):
        return list(value)
    return [item.strip() for item in value.split(',') if item.strip()]

def createFilters(config):
    '''Build the filter chain for a configuration'''
    chain = FilterChain()

    chain.add(ScopeFilter(config.includeScope, config.excludeScope))
    chain.add(TypeFilter(splitList(config.includeTypes), splitList(config.excludeTypes)))
    chain.add(ClassifierFilter(splitList(config.includeClassifiers), splitList(config.excludeClassifiers)))
    chain.add(GroupIdFilter(splitList(config.includeGroupIds), splitList(config.excludeGroupIds)))
    chain.add(ArtifactIdFilter(splitList(config.includeArtifactIds), splitList(config.excludeArtifactIds)))
    chain.add(P2Filter(config.excludeP2))

    return chain
