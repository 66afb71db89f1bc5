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
Resolved Maven artifacts and where to find them

Created on Mar 14, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

import os
import os.path
import logging

from pdetarget.common import ConfigurationError, MalformedInputError, canonicalPath

log = logging.getLogger('pdetarget.artifacts')

SCOPES = frozenset(('compile', 'provided', 'runtime', 'test', 'system', 'import'))

# Packaging types which end up in a file with the extension .jar
JAR_TYPES = frozenset(('jar', 'bundle', 'test-jar', 'ejb', 'ejb-client', 'maven-plugin',
                       'eclipse-plugin', 'eclipse-test-plugin', 'java-source', 'javadoc'))

def defaultLocalRepository():
    return os.path.join(os.path.expanduser('~'), '.m2', 'repository')

class ResolvedArtifact(object):
    '''A dependency which has been mapped to a file on the local disk'''
    def __init__(self, groupId, artifactId, version, type='jar', classifier=None, scope=None, file=None):
        self.groupId = groupId
        self.artifactId = artifactId
        self.version = version
        self.type = type or 'jar'
        self.classifier = classifier or None
        self.scope = scope
        self.file = file

        # test-jar is the type of the artifact with the classifier "tests"
        if self.type == 'test-jar' and self.classifier is None:
            self.classifier = 'tests'

    def key(self):
        return '%s:%s:%s' % (self.groupId, self.artifactId, self.version)

    def __repr__(self):
        return self.key()

    def __eq__(self, other):
        if not isinstance(other, ResolvedArtifact):
            return NotImplemented
        return ((self.groupId, self.artifactId, self.version, self.type, self.classifier) ==
                (other.groupId, other.artifactId, other.version, other.type, other.classifier))

    def __hash__(self):
        return hash((self.groupId, self.artifactId, self.version, self.type, self.classifier))

    def extension(self):
        return 'jar' if self.type in JAR_TYPES else self.type

    def fileName(self, classifier=None, extension=None):
        '''Standard Maven file name, for example junit-4.11.jar or junit-4.11-sources.jar'''
        classifier = classifier if classifier is not None else self.classifier
        extension = extension or self.extension()

        if classifier:
            return '%s-%s-%s.%s' % (self.artifactId, self.version, classifier, extension)
        return '%s-%s.%s' % (self.artifactId, self.version, extension)

    def directory(self):
        '''Canonical path of the directory which contains the artifact file; a symlinked file stays in its own directory'''
        return canonicalPath(os.path.dirname(os.path.abspath(self.file)))

    def sourcesFile(self):
        '''The attached sources JAR next to the artifact file'''
        if self.artifactId and self.version:
            name = self.fileName(classifier='sources', extension='jar')
        else:
            name = '%s-sources.jar' % os.path.splitext(os.path.basename(self.file))[0]

        return os.path.join(os.path.dirname(self.file), name)

def repositoryPath(repoDir, artifact):
    '''Path of an artifact in a local Maven repository'''
    path = os.path.join(repoDir, *artifact.groupId.split('.'))
    return os.path.join(path, artifact.artifactId, artifact.version, artifact.fileName())

def parseDependencyLine(line):
    '''Parse one line of "mvn dependency:list" output.

    Without -DoutputAbsoluteArtifactFilename=true, the path is missing:

        org.slf4j:slf4j-api:jar:1.7.2:compile:/home/me/.m2/repository/.../slf4j-api-1.7.2.jar
        org.testng:testng:jar:jdk15:5.8:test
        junit:junit:jar:4.11:test (optional)
        org.slf4j:slf4j-api:jar:1.7.2:compile -- module org.slf4j

    Returns None if the line doesn't describe an artifact.'''
    line = line.strip()
    if line.startswith('[INFO]'):
        line = line[len('[INFO]'):].strip()
    if not line or ':' not in line or ' ' in line.split(':', 1)[0]:
        return None

    pos = line.find(' -- module ')
    if pos >= 0:
        line = line[:pos]
    if line.endswith(' (optional)'):
        line = line[:-len(' (optional)')]
    line = line.strip()

    parts = line.split(':')
    scopeIndex = None
    for index in range(4, min(len(parts), 6)):
        if parts[index] in SCOPES:
            scopeIndex = index
            break

    if scopeIndex is None:
        raise MalformedInputError('Expected groupId:artifactId:type[:classifier]:version:scope[:file] but got [%s]' % line)

    coordinates = parts[:scopeIndex+1]
    file = ':'.join(parts[scopeIndex+1:]) or None

    if len(coordinates) == 5:
        groupId, artifactId, type, version, scope = coordinates
        classifier = None
    else:
        groupId, artifactId, type, classifier, version, scope = coordinates

    return ResolvedArtifact(groupId, artifactId, version, type=type, classifier=classifier, scope=scope, file=file)

def readDependencyList(fileName, repoDir=None):
    '''Read the output file of "mvn dependency:list" and return the resolved artifacts'''
    try:
        with open(fileName, 'r', encoding='UTF-8') as fh:
            lines = fh.readlines()
    except OSError as e:
        raise ConfigurationError("Can't read dependency list %s: %s" % (fileName, e)) from e

    result = []
    for number, line in enumerate(lines):
        try:
            artifact = parseDependencyLine(line)
        except MalformedInputError as e:
            raise MalformedInputError('%s:%d: %s' % (fileName, number + 1, e)) from e

        if artifact is None:
            continue

        if artifact.file is None:
            artifact.file = repositoryPath(repoDir or defaultLocalRepository(), artifact)

        result.append(artifact)

    log.debug('Read %d artifacts from %s' % (len(result), fileName))
    return result

def onlyExisting(artifacts):
    '''Drop artifacts whose file is missing'''
    result = []
    for artifact in artifacts:
        if artifact.file is None or not os.path.exists(artifact.file):
            log.warning('Artifact %s is not resolved: missing file %s' % (artifact.key(), artifact.file))
            continue

        result.append(artifact)
    return result

def collectDirectories(artifacts):
    '''Canonical directories of the artifacts in first-seen order without duplicates'''
    dirs = {}
    for artifact in artifacts:
        dirs.setdefault(artifact.directory(), True)
    return list(dirs)
